import logging

from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token
from utils.decorators import principal_required
from utils.errors import _sanitize_error_message
from utils.services import get_auth_service

logger = logging.getLogger(__name__)
auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _issue_token(principal) -> str:
    # The role travels in the token so later requests need no user lookup
    return create_access_token(
        identity=str(principal.user_id), additional_claims={"role": principal.role}
    )


@auth_bp.route("/register", methods=["POST"])
def api_register():
    """Register a new job seeker via API."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        username = data.get("username")
        email = data.get("email")
        password = data.get("password")

        if not all([username, email, password]):
            return jsonify({"error": "Username, email, and password are required"}), 400

        auth_service = get_auth_service()
        user_id = auth_service.register_user(username, email, password)
        principal = auth_service.build_principal({"user_id": user_id, "role": "user"})

        return (
            jsonify(
                {
                    "message": "User registered successfully",
                    "access_token": _issue_token(principal),
                    "user": {
                        "user_id": user_id,
                        "username": username.strip(),
                        "email": email.strip().lower(),
                        "role": principal.role,
                    },
                }
            ),
            201,
        )

    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Registration error: {str(e)}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@auth_bp.route("/login", methods=["POST"])
def api_login():
    """Login a user via API."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        username_or_email = data.get("username") or data.get("email")
        password = data.get("password")

        if not all([username_or_email, password]):
            return jsonify({"error": "Username/email and password are required"}), 400

        auth_service = get_auth_service()
        user = auth_service.authenticate_user(username_or_email, password)

        if not user:
            return jsonify({"error": "Invalid username or password"}), 401

        principal = auth_service.build_principal(user)
        return (
            jsonify(
                {
                    "message": "Login successful",
                    "access_token": _issue_token(principal),
                    "user": {
                        "user_id": user["user_id"],
                        "username": user["username"],
                        "email": user["email"],
                        "role": principal.role,
                        "is_admin": principal.is_admin,
                    },
                }
            ),
            200,
        )

    except Exception as e:
        logger.error(f"Login error: {str(e)}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@auth_bp.route("/change-password", methods=["POST"])
@principal_required
def api_change_password(principal):
    """Change the caller's password."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        current_password = data.get("current_password") or ""
        new_password = data.get("new_password") or ""
        confirm_password = data.get("confirm_password") or ""

        if not all([current_password, new_password, confirm_password]):
            return jsonify({"error": "All password fields are required"}), 400
        if new_password != confirm_password:
            return jsonify({"error": "New password and confirm password do not match"}), 400

        get_auth_service().change_password(principal.user_id, current_password, new_password)
        logger.info(f"Password updated for user {principal.user_id}")
        return jsonify({"message": "Password updated successfully"}), 200

    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error changing password: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
