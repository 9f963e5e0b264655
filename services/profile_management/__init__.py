"""
Profile Management Service

Service for managing job seeker profiles.
"""

from .profile_service import ProfileService

__all__ = ["ProfileService"]
