"""Authentication, user accounts and role capabilities."""

from .auth_service import AuthService
from .principal import (
    ROLE_ADMIN,
    ROLE_USER,
    AdminCapability,
    AuthorizationError,
    Principal,
    require_admin,
)
from .user_service import UserService

__all__ = [
    "ROLE_ADMIN",
    "ROLE_USER",
    "AdminCapability",
    "AuthService",
    "AuthorizationError",
    "Principal",
    "UserService",
    "require_admin",
]
