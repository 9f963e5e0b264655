"""Company Management Service.

Employers' company records. Listing is open to every user; creating, editing
and deleting companies needs an admin capability.
"""

from __future__ import annotations

import logging
from typing import Any

from services.auth.principal import AdminCapability, require_admin
from services.shared.database import Database, row_to_dict, rows_to_dicts

from .queries import (
    COUNT_ACTIVE_JOBS_FOR_COMPANY,
    DELETE_COMPANY,
    GET_ALL_COMPANIES,
    GET_COMPANY_BY_ID,
    INSERT_COMPANY,
    UPDATE_COMPANY_TEMPLATE,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "website", "logo_url", "location", "industry", "size")


class CompanyService:
    """Service for managing companies."""

    def __init__(self, database: Database):
        """Initialize the company service.

        Args:
            database: Database connection interface (implements Database protocol)
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def get_all_companies(self) -> list[dict[str, Any]]:
        """Get every company with its active job count, ordered by name."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_ALL_COMPANIES)
            companies = rows_to_dicts(cur)

        logger.debug(f"Retrieved {len(companies)} compan(ies)")
        return companies

    def get_company_by_id(self, company_id: str) -> dict[str, Any] | None:
        with self.db.get_cursor() as cur:
            cur.execute(GET_COMPANY_BY_ID, (company_id,))
            return row_to_dict(cur)

    def create_company(
        self,
        capability: AdminCapability,
        name: str,
        description: str | None = None,
        website: str | None = None,
        logo_url: str | None = None,
        location: str | None = None,
        industry: str | None = None,
        size: str | None = None,
    ) -> str:
        """Create a company.

        Returns:
            ID of the created company

        Raises:
            AuthorizationError: If capability is not an admin capability
            ValueError: If the name is missing
        """
        principal = require_admin(capability)
        if not name or not name.strip():
            raise ValueError("Company name is required")

        try:
            with self.db.get_cursor() as cur:
                cur.execute(
                    INSERT_COMPANY,
                    (
                        name.strip(),
                        description,
                        website or None,
                        logo_url or None,
                        location,
                        industry,
                        size,
                    ),
                )
                result = cur.fetchone()
        except Exception as e:
            logger.error(f"Error creating company '{name}': {e}", exc_info=True)
            raise

        if not result:
            raise ValueError("Failed to create company")

        company_id = result[0]
        logger.info(f"Created company {company_id} ('{name}') by user {principal.user_id}")
        return company_id

    def update_company(self, capability: AdminCapability, company_id: str, **fields: Any) -> bool:
        """Update company fields.

        Returns:
            True if the company was updated, False if it does not exist

        Raises:
            AuthorizationError: If capability is not an admin capability
            ValueError: If fields are unknown, empty, or blank out the name
        """
        principal = require_admin(capability)
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        if not fields:
            raise ValueError("No fields to update")
        if "name" in fields:
            if not fields["name"] or not fields["name"].strip():
                raise ValueError("Company name is required")
            fields["name"] = fields["name"].strip()

        columns = [name for name in UPDATABLE_FIELDS if name in fields]
        assignments = ", ".join(f"{name} = %s" for name in columns)
        params = [fields[name] for name in columns] + [company_id]

        with self.db.get_cursor() as cur:
            cur.execute(UPDATE_COMPANY_TEMPLATE.format(assignments=assignments), tuple(params))
            updated = cur.rowcount > 0

        if updated:
            logger.info(f"Updated company {company_id} by user {principal.user_id}")
        return updated

    def delete_company(self, capability: AdminCapability, company_id: str) -> bool:
        """Delete a company that has no active postings.

        Returns:
            True if the company was deleted, False if it does not exist

        Raises:
            AuthorizationError: If capability is not an admin capability
            ValueError: If the company still has active postings
        """
        principal = require_admin(capability)
        with self.db.get_cursor() as cur:
            cur.execute(COUNT_ACTIVE_JOBS_FOR_COMPANY, (company_id,))
            active_jobs = cur.fetchone()[0]
            if active_jobs:
                raise ValueError(
                    f"Cannot delete company with {active_jobs} active job(s). Deactivate them first."
                )
            cur.execute(DELETE_COMPANY, (company_id,))
            deleted = cur.rowcount > 0

        if deleted:
            logger.info(f"Deleted company {company_id} by user {principal.user_id}")
        return deleted
