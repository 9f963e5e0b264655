import logging
from datetime import datetime
from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required

from services.auth import AuthorizationError, Principal

logger = logging.getLogger(__name__)

# Rate limiting storage (in-memory, resets on restart)
_rate_limit_storage: dict[str, list[float]] = {}


def current_principal() -> Principal:
    """Resolve the caller's principal from the verified JWT.

    The role comes from the token's ``role`` claim, written once at login.
    """
    return Principal.from_claims(get_jwt_identity(), get_jwt())


def principal_required(f):
    """Require a valid JWT and pass the caller as ``principal=``."""

    @wraps(f)
    @jwt_required()
    def decorated_function(*args, **kwargs):
        try:
            principal = current_principal()
        except AuthorizationError as e:
            return jsonify({"error": str(e)}), 401
        return f(*args, principal=principal, **kwargs)

    return decorated_function


def admin_required(f):
    """Require an admin JWT and pass the admin capability as ``capability=``."""

    @wraps(f)
    @jwt_required()
    def decorated_function(*args, **kwargs):
        try:
            principal = current_principal()
        except AuthorizationError as e:
            return jsonify({"error": str(e)}), 401

        try:
            capability = principal.admin_capability()
        except AuthorizationError:
            logger.warning(f"User {principal.user_id} denied admin access to {f.__name__}")
            return jsonify({"error": "Admin access required"}), 403
        return f(*args, capability=capability, **kwargs)

    return decorated_function


def rate_limit(max_calls: int = 5, window_seconds: int = 60):
    """Simple per-user rate limiting decorator.

    Must be applied below ``principal_required`` so a verified JWT is present.

    Args:
        max_calls: Maximum number of calls allowed
        window_seconds: Time window in seconds
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user_id = get_jwt_identity()
            if not user_id:
                return jsonify({"error": "Authentication required"}), 401

            key = f"{user_id}:{f.__name__}"
            now = datetime.now().timestamp()

            _rate_limit_storage[key] = [
                timestamp
                for timestamp in _rate_limit_storage.get(key, [])
                if now - timestamp < window_seconds
            ]

            if len(_rate_limit_storage[key]) >= max_calls:
                logger.warning(f"Rate limit exceeded for user {user_id} on {f.__name__}")
                return jsonify(
                    {
                        "error": f"Rate limit exceeded. Maximum {max_calls} requests per {window_seconds} seconds."
                    }
                ), 429

            _rate_limit_storage[key].append(now)
            return f(*args, **kwargs)

        return decorated_function

    return decorator
