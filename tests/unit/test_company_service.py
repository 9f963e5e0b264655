"""Unit tests for CompanyService."""

import pytest

from services.auth.principal import AuthorizationError, Principal
from services.companies.company_service import CompanyService


@pytest.fixture
def company_service(mock_database):
    """Create a CompanyService instance with mocked database."""
    return CompanyService(database=mock_database)


class TestCompanyService:
    """Test cases for CompanyService."""

    def test_init_requires_database(self):
        with pytest.raises(ValueError, match="Database is required"):
            CompanyService(database=None)

    def test_get_all_companies(self, company_service, mock_cursor):
        mock_cursor.description = [("id",), ("name",), ("active_jobs_count",)]
        mock_cursor.fetchall.return_value = [("c1", "Acme", 2), ("c2", "Globex", 0)]

        companies = company_service.get_all_companies()

        assert companies[0] == {"id": "c1", "name": "Acme", "active_jobs_count": 2}
        assert len(companies) == 2

    def test_create_company(self, company_service, mock_cursor, admin_capability):
        mock_cursor.fetchone.return_value = ("c1",)

        company_id = company_service.create_company(
            admin_capability, name="  Acme ", website="", industry="Software"
        )

        assert company_id == "c1"
        params = mock_cursor.execute.call_args[0][1]
        assert params == ("Acme", None, None, None, None, "Software", None)

    def test_create_company_requires_name(self, company_service, admin_capability):
        with pytest.raises(ValueError, match="Company name is required"):
            company_service.create_company(admin_capability, name=" ")

    def test_create_company_requires_admin(self, company_service, mock_database):
        with pytest.raises(AuthorizationError):
            company_service.create_company(Principal(user_id=3), name="Acme")
        mock_database.get_cursor.assert_not_called()

    def test_update_company(self, company_service, mock_cursor, admin_capability):
        assert company_service.update_company(admin_capability, "c1", name=" Acme Inc ", size="50-200")

        query, params = mock_cursor.execute.call_args[0]
        assert "name = %s, size = %s" in query
        assert params == ("Acme Inc", "50-200", "c1")

    def test_update_company_rejects_unknown_field(self, company_service, admin_capability):
        with pytest.raises(ValueError, match="Cannot update field"):
            company_service.update_company(admin_capability, "c1", id="c2")

    def test_update_company_rejects_blank_name(self, company_service, admin_capability):
        with pytest.raises(ValueError, match="Company name is required"):
            company_service.update_company(admin_capability, "c1", name="")

    def test_delete_company_without_active_jobs(self, company_service, mock_cursor, admin_capability):
        mock_cursor.fetchone.return_value = (0,)

        assert company_service.delete_company(admin_capability, "c1") is True
        assert mock_cursor.execute.call_count == 2

    def test_delete_company_with_active_jobs(self, company_service, mock_cursor, admin_capability):
        mock_cursor.fetchone.return_value = (3,)

        with pytest.raises(ValueError, match="Cannot delete company with 3 active job\\(s\\)"):
            company_service.delete_company(admin_capability, "c1")
        assert mock_cursor.execute.call_count == 1

    def test_delete_missing_company(self, company_service, mock_cursor, admin_capability):
        mock_cursor.fetchone.return_value = (0,)
        mock_cursor.rowcount = 0

        assert company_service.delete_company(admin_capability, "missing") is False
