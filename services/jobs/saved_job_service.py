"""Service for job seekers' saved postings."""

import logging
from typing import Any

from services.shared.database import Database, rows_to_dicts

from .queries import GET_SAVED_JOBS_FOR_USER, IS_JOB_SAVED, SAVE_JOB, UNSAVE_JOB

logger = logging.getLogger(__name__)


class SavedJobService:
    """Service for saving and unsaving postings."""

    def __init__(self, database: Database):
        """Initialize the saved job service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def save_job(self, user_id: int, job_id: str) -> bool:
        """Save a posting for a user. Saving twice is a no-op.

        Returns:
            True if a new saved entry was created
        """
        with self.db.get_cursor() as cur:
            cur.execute(SAVE_JOB, (user_id, job_id))
            created = cur.rowcount > 0

        if created:
            logger.info(f"User {user_id} saved job {job_id}")
        return created

    def unsave_job(self, user_id: int, job_id: str) -> bool:
        """Remove a saved posting.

        Returns:
            True if an entry was removed
        """
        with self.db.get_cursor() as cur:
            cur.execute(UNSAVE_JOB, (user_id, job_id))
            removed = cur.rowcount > 0

        if removed:
            logger.info(f"User {user_id} unsaved job {job_id}")
        return removed

    def is_saved(self, user_id: int, job_id: str) -> bool:
        with self.db.get_cursor() as cur:
            cur.execute(IS_JOB_SAVED, (user_id, job_id))
            return cur.fetchone() is not None

    def get_saved_jobs(self, user_id: int) -> list[dict[str, Any]]:
        """Get a user's saved postings, most recently saved first."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_SAVED_JOBS_FOR_USER, (user_id,))
            jobs = rows_to_dicts(cur)

        logger.debug(f"Retrieved {len(jobs)} saved job(s) for user {user_id}")
        return jobs
