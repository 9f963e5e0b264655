"""Job application service."""

from .application_service import VALID_STATUSES, ApplicationNotFoundError, ApplicationService

__all__ = ["ApplicationNotFoundError", "ApplicationService", "VALID_STATUSES"]
