"""Service for browsing, searching and managing job postings."""

import logging
from typing import Any

from services.auth.principal import AdminCapability, require_admin
from services.shared.database import Database, row_to_dict, rows_to_dicts
from services.shared.experience import EXPERIENCE_LEVELS

from .queries import (
    DEACTIVATE_JOB,
    GET_ACTIVE_JOBS,
    GET_JOB_BY_ID,
    INSERT_JOB,
    JOB_SELECT,
    MARK_JOB_HIRED,
    SEARCH_JOBS_ORDER,
    UPDATE_JOB_TEMPLATE,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100

EMPLOYMENT_TYPES = ("full-time", "part-time", "contract", "internship")

# Columns an admin may change through update_job
UPDATABLE_FIELDS = (
    "title",
    "description",
    "location",
    "employment_type",
    "experience_level",
    "salary_min",
    "salary_max",
    "skills_required",
    "is_remote",
    "is_featured",
    "company_id",
)


def _clean_skills(skills: list[str] | None) -> list[str]:
    return [s.strip() for s in (skills or []) if isinstance(s, str) and s.strip()]


def _validate_posting_fields(fields: dict[str, Any]) -> None:
    """Validate posting fields that are present in ``fields``.

    Raises:
        ValueError: On the first invalid field
    """
    if "title" in fields and not (fields["title"] or "").strip():
        raise ValueError("Title is required")
    if "location" in fields and not (fields["location"] or "").strip():
        raise ValueError("Location is required")
    if "experience_level" in fields and fields["experience_level"] not in EXPERIENCE_LEVELS:
        raise ValueError(
            f"Invalid experience level. Must be one of: {', '.join(EXPERIENCE_LEVELS)}"
        )
    if "employment_type" in fields and fields["employment_type"] not in EMPLOYMENT_TYPES:
        raise ValueError(
            f"Invalid employment type. Must be one of: {', '.join(EMPLOYMENT_TYPES)}"
        )
    for key in ("salary_min", "salary_max"):
        value = fields.get(key)
        if value is not None and value < 0:
            raise ValueError(f"{key} must be non-negative")
    salary_min, salary_max = fields.get("salary_min"), fields.get("salary_max")
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise ValueError("salary_min cannot exceed salary_max")


class JobService:
    """Service for job postings and their companies."""

    def __init__(self, database: Database):
        """Initialize the job service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def get_active_jobs(self) -> list[dict[str, Any]]:
        """Get all active postings with company data, newest first."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_ACTIVE_JOBS)
            jobs = rows_to_dicts(cur)

        logger.debug(f"Retrieved {len(jobs)} active job(s)")
        return jobs

    def get_job_by_id(self, job_id: str) -> dict[str, Any] | None:
        """Get one posting with company data, or None if not found."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_JOB_BY_ID, (job_id,))
            return row_to_dict(cur)

    def search_jobs(
        self,
        query: str | None = None,
        location: str | None = None,
        employment_type: str | None = None,
        experience_level: str | None = None,
        salary_min: int | None = None,
        salary_max: int | None = None,
        is_remote: bool | None = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """Search active postings.

        Args:
            query: Case-insensitive text matched against title, description
                and company name
            location: Case-insensitive substring of the posting location
            employment_type: Exact employment type
            experience_level: Exact experience level
            salary_min: Postings whose upper salary bound reaches this amount
            salary_max: Postings whose lower salary bound stays within this amount
            is_remote: Restrict to remote (True) or on-site (False) postings
            limit: Page size (1-100)
            offset: Number of postings to skip

        Returns:
            List of posting dictionaries, featured first then newest

        Raises:
            ValueError: If limit or offset are out of range
        """
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValueError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if offset < 0:
            raise ValueError("Offset must be non-negative")

        conditions = ["j.is_active = true", "j.status = 'active'"]
        params: list[Any] = []

        if query and query.strip():
            pattern = f"%{query.strip()}%"
            conditions.append("(j.title ILIKE %s OR j.description ILIKE %s OR c.name ILIKE %s)")
            params.extend([pattern, pattern, pattern])
        if location and location.strip():
            conditions.append("j.location ILIKE %s")
            params.append(f"%{location.strip()}%")
        if employment_type:
            conditions.append("j.employment_type = %s")
            params.append(employment_type)
        if experience_level:
            conditions.append("j.experience_level = %s")
            params.append(experience_level)
        if salary_min is not None:
            conditions.append("COALESCE(j.salary_max, j.salary_min) >= %s")
            params.append(salary_min)
        if salary_max is not None:
            conditions.append("COALESCE(j.salary_min, j.salary_max) <= %s")
            params.append(salary_max)
        if is_remote is not None:
            conditions.append("j.is_remote = %s")
            params.append(is_remote)

        sql = JOB_SELECT + " WHERE " + " AND ".join(conditions) + SEARCH_JOBS_ORDER
        sql += " LIMIT %s OFFSET %s"
        params.extend([limit, offset])

        with self.db.get_cursor() as cur:
            cur.execute(sql, tuple(params))
            jobs = rows_to_dicts(cur)

        logger.debug(f"Job search returned {len(jobs)} job(s) (limit={limit}, offset={offset})")
        return jobs

    def create_job(
        self,
        capability: AdminCapability,
        title: str,
        description: str,
        location: str,
        employment_type: str,
        experience_level: str,
        company_id: str | None = None,
        salary_min: int | None = None,
        salary_max: int | None = None,
        skills_required: list[str] | None = None,
        is_remote: bool = False,
        is_featured: bool = False,
    ) -> str:
        """Publish a new posting. New postings start active.

        Returns:
            ID of the created posting

        Raises:
            AuthorizationError: If capability is not an admin capability
            ValueError: If validation fails
        """
        principal = require_admin(capability)
        fields = {
            "title": title,
            "location": location,
            "employment_type": employment_type,
            "experience_level": experience_level,
            "salary_min": salary_min,
            "salary_max": salary_max,
        }
        _validate_posting_fields(fields)

        try:
            with self.db.get_cursor() as cur:
                cur.execute(
                    INSERT_JOB,
                    (
                        title.strip(),
                        (description or "").strip(),
                        location.strip(),
                        employment_type,
                        experience_level,
                        salary_min,
                        salary_max,
                        _clean_skills(skills_required),
                        is_remote,
                        is_featured,
                        company_id,
                        principal.user_id,
                    ),
                )
                result = cur.fetchone()
        except Exception as e:
            logger.error(f"Error creating job '{title}': {e}", exc_info=True)
            raise

        if not result:
            raise ValueError("Failed to create job")

        job_id = result[0]
        logger.info(f"Created job {job_id} ('{title}') by user {principal.user_id}")
        return job_id

    def update_job(self, capability: AdminCapability, job_id: str, **fields: Any) -> bool:
        """Update editable fields of a posting.

        Returns:
            True if the posting was updated, False if it does not exist

        Raises:
            AuthorizationError: If capability is not an admin capability
            ValueError: If no valid field is given or validation fails
        """
        principal = require_admin(capability)
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        if not fields:
            raise ValueError("No fields to update")
        _validate_posting_fields(fields)

        if "skills_required" in fields:
            fields["skills_required"] = _clean_skills(fields["skills_required"])
        for key in ("title", "location", "description"):
            if isinstance(fields.get(key), str):
                fields[key] = fields[key].strip()

        columns = [name for name in UPDATABLE_FIELDS if name in fields]
        assignments = ", ".join(f"{name} = %s" for name in columns)
        params = [fields[name] for name in columns] + [job_id]

        with self.db.get_cursor() as cur:
            cur.execute(UPDATE_JOB_TEMPLATE.format(assignments=assignments), tuple(params))
            updated = cur.rowcount > 0

        if updated:
            logger.info(f"Updated job {job_id} ({', '.join(columns)}) by user {principal.user_id}")
        return updated

    def deactivate_job(self, capability: AdminCapability, job_id: str) -> bool:
        """Soft-delete a posting so it no longer appears in search or recommendations.

        Returns:
            True if the posting existed
        """
        principal = require_admin(capability)
        with self.db.get_cursor() as cur:
            cur.execute(DEACTIVATE_JOB, (job_id,))
            updated = cur.rowcount > 0

        if updated:
            logger.info(f"Deactivated job {job_id} by user {principal.user_id}")
        return updated

    def mark_job_hired(self, capability: AdminCapability, job_id: str) -> bool:
        """Mark an active posting as filled. Filled postings are also deactivated.

        Returns:
            True if an active posting was updated
        """
        principal = require_admin(capability)
        with self.db.get_cursor() as cur:
            cur.execute(MARK_JOB_HIRED, (job_id,))
            updated = cur.rowcount > 0

        if updated:
            logger.info(f"Marked job {job_id} as hired by user {principal.user_id}")
        return updated
