"""Authentication service for login and registration."""

import logging
from typing import Any

from .principal import ROLE_USER, Principal
from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_service: UserService):
        """Initialize the auth service.

        Args:
            user_service: UserService instance for user operations
        """
        if not user_service:
            raise ValueError("UserService is required")
        self.user_service = user_service

    def authenticate_user(self, username: str, password: str) -> dict[str, Any] | None:
        """Authenticate a user by username or email and password.

        Args:
            username: Username or email
            password: Plain text password

        Returns:
            User dictionary without the password hash if authentication
            succeeds, None otherwise
        """
        if not username or not password:
            return None

        user = self.user_service.get_user_by_username(username.strip())
        if not user:
            user = self.user_service.get_user_by_email(username.strip())

        if not user:
            logger.warning(f"Authentication failed: user not found: {username}")
            return None

        if not self.user_service.verify_password(password, user["password_hash"]):
            logger.warning(f"Authentication failed: invalid password for user: {username}")
            return None

        try:
            self.user_service.update_last_login(user["user_id"])
        except Exception as e:
            # Login still succeeds when the timestamp cannot be written
            logger.error(f"Error updating last login: {e}", exc_info=True)

        user_clean = {k: v for k, v in user.items() if k != "password_hash"}
        logger.info(f"User authenticated: {user['username']} (ID: {user['user_id']})")
        return user_clean

    def register_user(self, username: str, email: str, password: str) -> int:
        """Register a new job seeker account.

        Admin accounts are not created through self-registration.

        Raises:
            ValueError: If username or email already exists, or if validation fails
        """
        return self.user_service.create_user(
            username=username, email=email, password=password, role=ROLE_USER
        )

    def build_principal(self, user: dict[str, Any]) -> Principal:
        """Resolve the session principal for an authenticated user record."""
        return Principal(user_id=int(user["user_id"]), role=user.get("role") or ROLE_USER)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        """Replace a user's password after checking the current one.

        Raises:
            ValueError: If the user is unknown, the current password is wrong,
                or the new password fails validation
        """
        user = self.user_service.get_user_by_id(user_id)
        if not user:
            raise ValueError("User not found")

        if not self.user_service.verify_password(current_password or "", user["password_hash"]):
            logger.warning(f"Password change rejected: wrong current password for user {user_id}")
            raise ValueError("Current password is incorrect")

        self.user_service.update_user_password(user_id, new_password)
