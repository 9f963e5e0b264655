import logging

from flask import Blueprint, jsonify, request
from utils.decorators import principal_required
from utils.errors import _sanitize_error_message
from utils.params import parse_skills
from utils.services import get_profile_service

logger = logging.getLogger(__name__)
profile_bp = Blueprint("profile", __name__, url_prefix="/api/profile")


@profile_bp.route("", methods=["GET"])
@principal_required
def api_get_profile(principal):
    """Get the caller's job seeker profile."""
    try:
        profile = get_profile_service().get_profile(principal.user_id)
        if not profile:
            return jsonify({"error": "Profile not found"}), 404
        return jsonify({"profile": profile}), 200
    except Exception as e:
        logger.error(f"Error fetching profile: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@profile_bp.route("", methods=["PUT"])
@principal_required
def api_save_profile(principal):
    """Create or update the caller's job seeker profile."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        profile_service = get_profile_service()
        profile_service.save_profile(
            user_id=principal.user_id,
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            phone=data.get("phone"),
            location=data.get("location"),
            skills=parse_skills(data.get("skills")),
            experience_level=data.get("experience_level") or "entry",
            resume_url=data.get("resume_url"),
        )
        profile = profile_service.get_profile(principal.user_id)
        return jsonify({"message": "Profile updated successfully", "profile": profile}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error saving profile: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
