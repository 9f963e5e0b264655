"""Profile Management Service.

Job seeker profiles: contact details plus the skills, experience level and
location used for job recommendations.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from services.shared.database import Database, row_to_dict
from services.shared.experience import EXPERIENCE_LEVELS

from .queries import GET_PROFILE_BY_USER_ID, UPSERT_PROFILE

logger = logging.getLogger(__name__)

DEFAULT_EXPERIENCE_LEVEL = "entry"


class ProfileService:
    """Service for managing job seeker profiles."""

    def __init__(self, database: Database):
        """Initialize the profile service.

        Args:
            database: Database connection interface (implements Database protocol)
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def get_profile(self, user_id: int) -> dict[str, Any] | None:
        """Get a user's profile.

        Normalizes the skills field to a list if the driver returned it as a
        JSON string.

        Args:
            user_id: Owner of the profile

        Returns:
            Profile dictionary, or None if the user has not created one yet
        """
        with self.db.get_cursor() as cur:
            cur.execute(GET_PROFILE_BY_USER_ID, (user_id,))
            profile = row_to_dict(cur)

        if not profile:
            return None

        skills = profile.get("skills")
        if isinstance(skills, str):
            try:
                profile["skills"] = json.loads(skills)
            except (json.JSONDecodeError, TypeError):
                logger.warning(f"Failed to parse skills JSON for user {user_id}, setting to []")
                profile["skills"] = []
        elif skills is None:
            profile["skills"] = []

        return profile

    def save_profile(
        self,
        user_id: int,
        full_name: str,
        email: str,
        phone: str | None = None,
        location: str | None = None,
        skills: list[str] | None = None,
        experience_level: str = DEFAULT_EXPERIENCE_LEVEL,
        resume_url: str | None = None,
    ) -> int:
        """Create or update a user's profile.

        Args:
            user_id: Owner of the profile
            full_name: Display name
            email: Contact email
            phone: Optional phone number
            location: Optional preferred location
            skills: Skill tags; blanks and duplicates (ignoring case) are dropped
            experience_level: One of entry, mid-level, senior, executive
            resume_url: Optional resume link (stored as given)

        Returns:
            Profile ID

        Raises:
            ValueError: If validation fails
        """
        if not full_name or not full_name.strip():
            raise ValueError("Full name is required")
        if not email or not email.strip():
            raise ValueError("Email is required")
        if experience_level not in EXPERIENCE_LEVELS:
            raise ValueError(
                f"Invalid experience level. Must be one of: {', '.join(EXPERIENCE_LEVELS)}"
            )

        cleaned_skills: list[str] = []
        seen: set[str] = set()
        for skill in skills or []:
            if not isinstance(skill, str) or not skill.strip():
                continue
            key = skill.strip().lower()
            if key not in seen:
                seen.add(key)
                cleaned_skills.append(skill.strip())

        try:
            with self.db.get_cursor() as cur:
                cur.execute(
                    UPSERT_PROFILE,
                    (
                        user_id,
                        full_name.strip(),
                        email.strip(),
                        (phone or "").strip() or None,
                        (location or "").strip() or None,
                        cleaned_skills,
                        experience_level,
                        (resume_url or "").strip() or None,
                    ),
                )
                result = cur.fetchone()
        except Exception as e:
            logger.error(f"Error saving profile for user {user_id}: {e}", exc_info=True)
            raise

        if not result:
            raise ValueError("Failed to save profile")

        profile_id = result[0]
        logger.info(
            f"Saved profile {profile_id} for user {user_id} ({len(cleaned_skills)} skill(s))"
        )
        return profile_id
