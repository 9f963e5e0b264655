import logging

from flask import Blueprint, jsonify, request
from utils.decorators import admin_required
from utils.errors import _sanitize_error_message
from utils.services import get_company_service

logger = logging.getLogger(__name__)
companies_bp = Blueprint("companies", __name__, url_prefix="/api/companies")

COMPANY_FIELDS = ("name", "description", "website", "logo_url", "location", "industry", "size")


@companies_bp.route("", methods=["GET"])
def api_list_companies():
    """List companies with their active job counts."""
    try:
        companies = get_company_service().get_all_companies()
        return jsonify({"companies": companies}), 200
    except Exception as e:
        logger.error(f"Error fetching companies: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("/<company_id>", methods=["GET"])
def api_get_company(company_id: str):
    try:
        company = get_company_service().get_company_by_id(company_id)
        if not company:
            return jsonify({"error": f"Company {company_id} not found"}), 404
        return jsonify({"company": company}), 200
    except Exception as e:
        logger.error(f"Error fetching company {company_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("", methods=["POST"])
@admin_required
def api_create_company(capability):
    """Create a company (admin)."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        fields = {key: data[key] for key in COMPANY_FIELDS if key in data}
        company_id = get_company_service().create_company(
            capability, name=fields.pop("name", ""), **fields
        )
        return jsonify({"message": "Company created", "company_id": company_id}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error creating company: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("/<company_id>", methods=["PUT"])
@admin_required
def api_update_company(company_id: str, capability):
    """Update a company (admin)."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        fields = {key: data[key] for key in COMPANY_FIELDS if key in data}
        if not get_company_service().update_company(capability, company_id, **fields):
            return jsonify({"error": f"Company {company_id} not found"}), 404
        return jsonify({"message": "Company updated"}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating company {company_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("/<company_id>", methods=["DELETE"])
@admin_required
def api_delete_company(company_id: str, capability):
    """Delete a company without active postings (admin)."""
    try:
        if not get_company_service().delete_company(capability, company_id):
            return jsonify({"error": f"Company {company_id} not found"}), 404
        return jsonify({"message": "Company deleted"}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 409
    except Exception as e:
        logger.error(f"Error deleting company {company_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
