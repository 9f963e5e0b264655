"""Session principal and admin capability.

The caller's role is resolved once, when the session is established, into a
``Principal``. Privileged service operations do not look the user up again;
they take an ``AdminCapability`` argument, which can only be obtained from a
principal whose role is ``admin``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ROLE_USER = "user"
ROLE_ADMIN = "admin"
VALID_ROLES = (ROLE_USER, ROLE_ADMIN)

_CAPABILITY_TOKEN = object()


class AuthorizationError(PermissionError):
    """Raised when a principal attempts an operation its role does not allow."""


@dataclass(frozen=True)
class Principal:
    """Authenticated caller identity."""

    user_id: int
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def admin_capability(self) -> AdminCapability:
        """Return the admin capability for this principal.

        Raises:
            AuthorizationError: If the principal is not an admin
        """
        if not self.is_admin:
            raise AuthorizationError("Admin access required")
        return AdminCapability(self, _token=_CAPABILITY_TOKEN)

    @classmethod
    def from_claims(cls, identity: Any, claims: dict[str, Any]) -> Principal:
        """Build a principal from a JWT identity and its additional claims.

        Unknown roles fall back to ``user``.
        """
        if identity is None:
            raise AuthorizationError("Missing user identity")
        try:
            user_id = int(identity)
        except (TypeError, ValueError) as e:
            raise AuthorizationError(f"Invalid user identity: {identity!r}") from e
        role = claims.get("role")
        if role not in VALID_ROLES:
            role = ROLE_USER
        return cls(user_id=user_id, role=role)


class AdminCapability:
    """Proof that the holder acts on behalf of an admin principal."""

    __slots__ = ("principal",)

    def __init__(self, principal: Principal, *, _token: object = None):
        if _token is not _CAPABILITY_TOKEN:
            raise AuthorizationError("AdminCapability must be obtained from Principal.admin_capability()")
        self.principal = principal

    def __repr__(self) -> str:
        return f"AdminCapability(user_id={self.principal.user_id})"


def require_admin(capability: Any) -> Principal:
    """Check that ``capability`` is a genuine admin capability.

    Returns:
        The admin principal the capability belongs to

    Raises:
        AuthorizationError: If the argument is not an AdminCapability
    """
    if not isinstance(capability, AdminCapability):
        raise AuthorizationError("Admin access required")
    return capability.principal
