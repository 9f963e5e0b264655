"""Service for job applications and their review status."""

import logging
import re
from typing import Any

from psycopg2 import errors as pg_errors

from services.auth.principal import AdminCapability, require_admin
from services.shared.database import Database, rows_to_dicts

from .queries import (
    GET_ACTIVE_JOB_FOR_APPLICATION,
    GET_ALL_APPLICATIONS,
    GET_APPLICATION_STATUS,
    GET_APPLICATIONS_FOR_JOB,
    GET_APPLICATIONS_FOR_USER,
    HAS_APPLIED,
    INSERT_APPLICATION,
    UPDATE_APPLICATION_STATUS,
)

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_REVIEWED = "reviewed"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
VALID_STATUSES = (STATUS_PENDING, STATUS_REVIEWED, STATUS_ACCEPTED, STATUS_REJECTED)

# Allowed moves out of each status; accepted and rejected are final
STATUS_TRANSITIONS = {
    STATUS_PENDING: {STATUS_REVIEWED, STATUS_ACCEPTED, STATUS_REJECTED},
    STATUS_REVIEWED: {STATUS_ACCEPTED, STATUS_REJECTED},
    STATUS_ACCEPTED: set(),
    STATUS_REJECTED: set(),
}

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

DUPLICATE_APPLICATION_MESSAGE = "You have already applied for this job"


class ApplicationNotFoundError(LookupError):
    """Raised when an application id does not exist."""


class ApplicationService:
    """Service for submitting and reviewing job applications."""

    def __init__(self, database: Database):
        """Initialize the application service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def submit_application(
        self,
        user_id: int,
        job_id: str,
        applicant_name: str,
        applicant_email: str,
        applicant_phone: str | None = None,
        resume_url: str | None = None,
        cover_letter: str | None = None,
    ) -> str:
        """Apply to an active posting. New applications start as 'pending'.

        Args:
            user_id: Applying user
            job_id: Posting to apply to
            applicant_name: Applicant full name
            applicant_email: Contact email
            applicant_phone: Optional phone number
            resume_url: Optional resume link (stored as given)
            cover_letter: Optional cover letter text

        Returns:
            Application ID

        Raises:
            ValueError: If validation fails, the posting is not open, or the
                user already applied to it
        """
        if not applicant_name or not applicant_name.strip():
            raise ValueError("Applicant name is required")
        if not applicant_email or not EMAIL_PATTERN.match(applicant_email.strip()):
            raise ValueError("A valid applicant email is required")

        try:
            with self.db.get_cursor() as cur:
                cur.execute(GET_ACTIVE_JOB_FOR_APPLICATION, (job_id,))
                if not cur.fetchone():
                    raise ValueError(f"Job {job_id} is not open for applications")

                cur.execute(HAS_APPLIED, (user_id, job_id))
                if cur.fetchone():
                    raise ValueError(DUPLICATE_APPLICATION_MESSAGE)

                cur.execute(
                    INSERT_APPLICATION,
                    (
                        job_id,
                        user_id,
                        applicant_name.strip(),
                        applicant_email.strip(),
                        (applicant_phone or "").strip() or None,
                        (resume_url or "").strip() or None,
                        (cover_letter or "").strip() or None,
                    ),
                )
                result = cur.fetchone()
        except pg_errors.UniqueViolation as e:
            raise ValueError(DUPLICATE_APPLICATION_MESSAGE) from e

        if not result:
            raise ValueError("Failed to submit application")

        application_id = result[0]
        logger.info(f"User {user_id} applied to job {job_id} (application {application_id})")
        return application_id

    def get_applications_for_user(self, user_id: int) -> list[dict[str, Any]]:
        """Get a user's applications, newest first."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_APPLICATIONS_FOR_USER, (user_id,))
            applications = rows_to_dicts(cur)

        logger.debug(f"Retrieved {len(applications)} application(s) for user {user_id}")
        return applications

    def get_all_applications(self, capability: AdminCapability) -> list[dict[str, Any]]:
        """Get every application (admin view), newest first."""
        require_admin(capability)
        with self.db.get_cursor() as cur:
            cur.execute(GET_ALL_APPLICATIONS)
            return rows_to_dicts(cur)

    def get_applications_for_job(
        self, capability: AdminCapability, job_id: str
    ) -> list[dict[str, Any]]:
        """Get the applications received by one posting (admin view)."""
        require_admin(capability)
        with self.db.get_cursor() as cur:
            cur.execute(GET_APPLICATIONS_FOR_JOB, (job_id,))
            return rows_to_dicts(cur)

    def update_status(self, capability: AdminCapability, application_id: str, status: str) -> str:
        """Move an application to a new review status.

        Setting the current status again is a no-op.

        Returns:
            The application's status after the call

        Raises:
            AuthorizationError: If capability is not an admin capability
            ValueError: If the status is unknown or the transition is not allowed
            ApplicationNotFoundError: If the application does not exist
        """
        principal = require_admin(capability)
        if status not in VALID_STATUSES:
            raise ValueError(f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}")

        with self.db.get_cursor() as cur:
            cur.execute(GET_APPLICATION_STATUS, (application_id,))
            row = cur.fetchone()
            if not row:
                raise ApplicationNotFoundError(f"Application {application_id} not found")

            current = row[0]
            if current == status:
                return current
            if status not in STATUS_TRANSITIONS.get(current, set()):
                raise ValueError(f"Cannot change application status from '{current}' to '{status}'")

            cur.execute(UPDATE_APPLICATION_STATUS, (status, application_id))

        logger.info(
            f"Application {application_id} moved {current} -> {status} by user {principal.user_id}"
        )
        return status

    @staticmethod
    def count_by_status(applications: list[dict[str, Any]]) -> dict[str, int]:
        """Count applications per status, including the total."""
        counts = {status: 0 for status in VALID_STATUSES}
        for application in applications:
            status = application.get("status")
            if status in counts:
                counts[status] += 1
        counts["total"] = len(applications)
        return counts
