import logging

from flask import Blueprint, jsonify, request
from utils.decorators import admin_required, principal_required, rate_limit
from utils.errors import _sanitize_error_message
from utils.services import get_application_service

from services.applications import ApplicationNotFoundError, ApplicationService

logger = logging.getLogger(__name__)
applications_bp = Blueprint("applications", __name__, url_prefix="/api/applications")


@applications_bp.route("", methods=["POST"])
@principal_required
@rate_limit(max_calls=10, window_seconds=60)
def api_submit_application(principal):
    """Apply to a job posting."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        job_id = data.get("job_id")
        if not job_id:
            return jsonify({"error": "job_id is required"}), 400

        application_id = get_application_service().submit_application(
            user_id=principal.user_id,
            job_id=job_id,
            applicant_name=data.get("applicant_name", ""),
            applicant_email=data.get("applicant_email", ""),
            applicant_phone=data.get("applicant_phone"),
            resume_url=data.get("resume_url"),
            cover_letter=data.get("cover_letter"),
        )
        return jsonify(
            {"message": "Application submitted", "application_id": application_id}
        ), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error submitting application: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@applications_bp.route("", methods=["GET"])
@principal_required
def api_list_my_applications(principal):
    """List the caller's applications with per-status counts."""
    try:
        applications = get_application_service().get_applications_for_user(principal.user_id)
        return jsonify(
            {
                "applications": applications,
                "counts": ApplicationService.count_by_status(applications),
            }
        ), 200
    except Exception as e:
        logger.error(f"Error fetching applications: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@applications_bp.route("/all", methods=["GET"])
@admin_required
def api_list_all_applications(capability):
    """List every application, optionally for one posting (admin)."""
    try:
        service = get_application_service()
        job_id = request.args.get("job_id")
        if job_id:
            applications = service.get_applications_for_job(capability, job_id)
        else:
            applications = service.get_all_applications(capability)
        return jsonify(
            {
                "applications": applications,
                "counts": ApplicationService.count_by_status(applications),
            }
        ), 200
    except Exception as e:
        logger.error(f"Error fetching all applications: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@applications_bp.route("/<application_id>/status", methods=["PUT"])
@admin_required
def api_update_application_status(application_id: str, capability):
    """Change an application's review status (admin)."""
    try:
        data = request.get_json(silent=True) or {}
        status = data.get("status")
        if not status:
            return jsonify({"error": "status is required"}), 400

        new_status = get_application_service().update_status(capability, application_id, status)
        return jsonify({"message": f"Application {new_status}", "status": new_status}), 200
    except ApplicationNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating application {application_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
