"""
Job Board Services

This package contains the core Python services:
- auth: user accounts, login and admin capabilities
- profile_management: job seeker profiles
- companies: employer company records
- jobs: job postings, search and saved jobs
- applications: job applications and review status
- recommendations: profile-to-posting match scoring
"""
