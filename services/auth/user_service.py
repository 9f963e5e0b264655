"""User account storage for the job board."""

import logging
from typing import Any

import bcrypt

from services.shared.database import Database, row_to_dict

from .principal import VALID_ROLES, ROLE_USER
from .queries import (
    GET_USER_BY_EMAIL,
    GET_USER_BY_ID,
    GET_USER_BY_USERNAME,
    INSERT_USER,
    UPDATE_USER_LAST_LOGIN,
    UPDATE_USER_PASSWORD,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class UserService:
    """Service for user accounts and password hashing."""

    def __init__(self, database: Database):
        """Initialize the user service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def create_user(
        self,
        username: str,
        email: str,
        password: str,
        role: str = ROLE_USER,
    ) -> int:
        """Create a new user account.

        Args:
            username: Unique username
            email: Unique email address
            password: Plain text password (will be hashed)
            role: User role ('user' or 'admin'), defaults to 'user'

        Returns:
            User ID of the created user

        Raises:
            ValueError: If username or email already exists, or if validation fails
        """
        if not username or not username.strip():
            raise ValueError("Username is required")
        if not email or not email.strip():
            raise ValueError("Email is required")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if role not in VALID_ROLES:
            raise ValueError("Role must be 'user' or 'admin'")

        if self.get_user_by_username(username):
            raise ValueError(f"Username '{username}' already exists")
        if self.get_user_by_email(email):
            raise ValueError(f"Email '{email}' already exists")

        password_hash = self._hash_password(password)

        try:
            with self.db.get_cursor() as cur:
                cur.execute(
                    INSERT_USER,
                    (username.strip(), email.strip().lower(), password_hash, role),
                )
                result = cur.fetchone()
        except Exception as e:
            logger.error(f"Error creating user {username}: {e}", exc_info=True)
            raise

        if not result:
            raise ValueError("Failed to create user")

        user_id = result[0]
        logger.info(f"Created user: {username} (ID: {user_id}, role: {role})")
        return user_id

    def get_user_by_username(self, username: str) -> dict[str, Any] | None:
        """Get user by username, or None if not found."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_USER_BY_USERNAME, (username.strip(),))
            return row_to_dict(cur)

    def get_user_by_email(self, email: str) -> dict[str, Any] | None:
        """Get user by email (case-insensitive), or None if not found."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_USER_BY_EMAIL, (email.strip().lower(),))
            return row_to_dict(cur)

    def get_user_by_id(self, user_id: int) -> dict[str, Any] | None:
        """Get user by ID, or None if not found."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_USER_BY_ID, (user_id,))
            return row_to_dict(cur)

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a password against a bcrypt hash.

        A malformed hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Error verifying password: {e}")
            return False

    def update_last_login(self, user_id: int) -> None:
        """Update user's last login timestamp."""
        try:
            with self.db.get_cursor() as cur:
                cur.execute(UPDATE_USER_LAST_LOGIN, (user_id,))
        except Exception as e:
            logger.error(f"Error updating last login for user {user_id}: {e}", exc_info=True)
            raise

    def update_user_password(self, user_id: int, new_password: str) -> None:
        """Replace a user's password.

        Raises:
            ValueError: If the password is too short or the user does not exist
        """
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        password_hash = self._hash_password(new_password)
        try:
            with self.db.get_cursor() as cur:
                cur.execute(UPDATE_USER_PASSWORD, (password_hash, user_id))
                rows_affected = cur.rowcount
        except Exception as e:
            logger.error(f"Error updating password for user {user_id}: {e}", exc_info=True)
            raise

        if rows_affected == 0:
            raise ValueError(f"User {user_id} not found")
        logger.info(f"Updated password for user {user_id}")

    def _hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
