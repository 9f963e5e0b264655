"""
Recommendations Service

Scores and ranks job postings against job seeker profiles.
"""

from .job_recommender import JobRecommender, serialize_match
from .match_scorer import MatchResult, calculate_match_score, match_label, score_and_rank

__all__ = [
    "JobRecommender",
    "MatchResult",
    "calculate_match_score",
    "match_label",
    "score_and_rank",
    "serialize_match",
]
