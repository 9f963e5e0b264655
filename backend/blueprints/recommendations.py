import logging

from flask import Blueprint, jsonify
from utils.decorators import principal_required
from utils.errors import _sanitize_error_message
from utils.services import get_job_recommender

logger = logging.getLogger(__name__)
recommendations_bp = Blueprint("recommendations", __name__, url_prefix="/api/recommendations")


@recommendations_bp.route("", methods=["GET"])
@principal_required
def api_get_recommendations(principal):
    """Recommended postings for the caller's profile, best match first.

    ``has_profile`` is false when the caller has not created a profile yet.
    """
    try:
        result = get_job_recommender().recommend_for_user(principal.user_id)
        return jsonify(result), 200
    except Exception as e:
        logger.error(f"Error building recommendations: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
