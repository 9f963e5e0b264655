import logging

from config import Config
from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from utils.decorators import admin_required, current_principal, principal_required
from utils.errors import _sanitize_error_message
from utils.params import parse_bool, parse_optional_int, parse_skills
from utils.services import get_job_service, get_saved_job_service

from services.auth import AuthorizationError

logger = logging.getLogger(__name__)
jobs_bp = Blueprint("jobs", __name__, url_prefix="/api/jobs")


def _posting_fields(data: dict) -> dict:
    """Pick posting fields out of a JSON body, converting their types."""
    fields = {}
    for key in ("title", "description", "location", "employment_type", "experience_level"):
        if key in data:
            fields[key] = data[key]
    for key in ("salary_min", "salary_max"):
        if key in data:
            fields[key] = parse_optional_int(data[key], key)
    for key in ("is_remote", "is_featured"):
        if key in data:
            fields[key] = bool(parse_bool(data[key]))
    if "skills_required" in data:
        fields["skills_required"] = parse_skills(data["skills_required"])
    if "company_id" in data:
        fields["company_id"] = data["company_id"] or None
    return fields


@jobs_bp.route("", methods=["GET"])
def api_search_jobs():
    """Search active job postings."""
    try:
        args = request.args
        page_size = parse_optional_int(args.get("limit"), "limit") or Config.JOBS_PER_PAGE
        page_size = min(page_size, Config.MAX_JOBS_PER_PAGE)
        offset = parse_optional_int(args.get("offset"), "offset") or 0

        jobs = get_job_service().search_jobs(
            query=args.get("query"),
            location=args.get("location"),
            employment_type=args.get("employment_type") or None,
            experience_level=args.get("experience_level") or None,
            salary_min=parse_optional_int(args.get("salary_min"), "salary_min"),
            salary_max=parse_optional_int(args.get("salary_max"), "salary_max"),
            is_remote=parse_bool(args.get("is_remote")),
            limit=page_size,
            offset=offset,
        )
        return jsonify({"jobs": jobs, "limit": page_size, "offset": offset}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error searching jobs: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/saved", methods=["GET"])
@principal_required
def api_list_saved_jobs(principal):
    """List the caller's saved postings."""
    try:
        jobs = get_saved_job_service().get_saved_jobs(principal.user_id)
        return jsonify({"jobs": jobs}), 200
    except Exception as e:
        logger.error(f"Error fetching saved jobs: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<job_id>", methods=["GET"])
@jwt_required(optional=True)
def api_get_job(job_id: str):
    """Get job details. Signed-in callers also learn whether they saved it."""
    try:
        job = get_job_service().get_job_by_id(job_id)
        if not job:
            return jsonify({"error": f"Job {job_id} not found"}), 404

        payload = {"job": job}
        if get_jwt_identity():
            principal = current_principal()
            payload["saved"] = get_saved_job_service().is_saved(principal.user_id, job_id)
        return jsonify(payload), 200
    except AuthorizationError as e:
        return jsonify({"error": str(e)}), 401
    except Exception as e:
        logger.error(f"Error fetching job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<job_id>/save", methods=["POST"])
@principal_required
def api_save_job(job_id: str, principal):
    """Save a posting for the caller."""
    try:
        if not get_job_service().get_job_by_id(job_id):
            return jsonify({"error": f"Job {job_id} not found"}), 404
        created = get_saved_job_service().save_job(principal.user_id, job_id)
        return jsonify({"message": "Job saved", "saved": True}), 201 if created else 200
    except Exception as e:
        logger.error(f"Error saving job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<job_id>/save", methods=["DELETE"])
@principal_required
def api_unsave_job(job_id: str, principal):
    """Remove a posting from the caller's saved jobs."""
    try:
        get_saved_job_service().unsave_job(principal.user_id, job_id)
        return jsonify({"message": "Job removed from saved jobs", "saved": False}), 200
    except Exception as e:
        logger.error(f"Error unsaving job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("", methods=["POST"])
@admin_required
def api_create_job(capability):
    """Publish a new job posting (admin)."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        fields = _posting_fields(data)
        missing = [
            key
            for key in ("title", "location", "employment_type", "experience_level")
            if not fields.get(key)
        ]
        if missing:
            return jsonify({"error": f"Missing required field(s): {', '.join(missing)}"}), 400

        job_service = get_job_service()
        job_id = job_service.create_job(capability, description=fields.pop("description", ""), **fields)
        return jsonify({"message": "Job posted successfully", "job_id": job_id}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error creating job: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<job_id>", methods=["PUT"])
@admin_required
def api_update_job(job_id: str, capability):
    """Update a job posting (admin)."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        updated = get_job_service().update_job(capability, job_id, **_posting_fields(data))
        if not updated:
            return jsonify({"error": f"Job {job_id} not found"}), 404
        return jsonify({"message": "Job updated successfully"}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<job_id>/deactivate", methods=["POST"])
@admin_required
def api_deactivate_job(job_id: str, capability):
    """Deactivate (soft-delete) a job posting (admin)."""
    try:
        if not get_job_service().deactivate_job(capability, job_id):
            return jsonify({"error": f"Job {job_id} not found"}), 404
        return jsonify({"message": "Job deactivated"}), 200
    except Exception as e:
        logger.error(f"Error deactivating job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<job_id>/hired", methods=["POST"])
@admin_required
def api_mark_job_hired(job_id: str, capability):
    """Mark a job posting as filled (admin)."""
    try:
        if not get_job_service().mark_job_hired(capability, job_id):
            return jsonify({"error": f"Active job {job_id} not found"}), 404
        return jsonify({"message": "Job marked as hired"}), 200
    except Exception as e:
        logger.error(f"Error marking job {job_id} hired: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
