"""Job posting and saved job services."""

from .job_service import JobService
from .saved_job_service import SavedJobService

__all__ = ["JobService", "SavedJobService"]
