"""Unit tests for the Flask API with the service layer mocked out."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from app import create_app
from config import Config
from flask_jwt_extended import create_access_token, decode_token
from utils import decorators

from services.applications import ApplicationNotFoundError
from services.auth import AdminCapability, Principal


class _TestConfig(Config):
    TESTING = True
    JWT_SECRET_KEY = "unit-test-jwt-secret-key-0123456789abcdef"


@pytest.fixture
def flask_app():
    return create_app(_TestConfig)


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    decorators._rate_limit_storage.clear()
    yield
    decorators._rate_limit_storage.clear()


def _headers(flask_app, user_id=7, role="user"):
    with flask_app.app_context():
        token = create_access_token(identity=str(user_id), additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(flask_app):
    return _headers(flask_app)


@pytest.fixture
def admin_headers(flask_app):
    return _headers(flask_app, user_id=1, role="admin")


class TestAuthApi:
    """Registration and login."""

    def test_register_returns_user_token(self, flask_app, client):
        auth_service = Mock()
        auth_service.register_user.return_value = 5
        auth_service.build_principal.return_value = Principal(user_id=5)

        with patch("blueprints.auth.get_auth_service", return_value=auth_service):
            response = client.post(
                "/api/auth/register",
                json={"username": "jane", "email": "Jane@Example.com", "password": "password123"},
            )

        assert response.status_code == 201
        data = response.get_json()
        assert data["user"] == {
            "user_id": 5,
            "username": "jane",
            "email": "jane@example.com",
            "role": "user",
        }
        with flask_app.app_context():
            claims = decode_token(data["access_token"])
        assert claims["sub"] == "5"
        assert claims["role"] == "user"

    def test_register_requires_body(self, client):
        response = client.post("/api/auth/register")

        assert response.status_code == 400
        assert response.get_json()["error"] == "No data provided"

    def test_register_validation_error(self, client):
        auth_service = Mock()
        auth_service.register_user.side_effect = ValueError("Username 'jane' already exists")

        with patch("blueprints.auth.get_auth_service", return_value=auth_service):
            response = client.post(
                "/api/auth/register",
                json={"username": "jane", "email": "jane@example.com", "password": "password123"},
            )

        assert response.status_code == 400
        assert "already exists" in response.get_json()["error"]

    def test_login_admin_token_carries_role(self, flask_app, client):
        auth_service = Mock()
        auth_service.authenticate_user.return_value = {
            "user_id": 1,
            "username": "admin",
            "email": "admin@example.com",
            "role": "admin",
        }
        auth_service.build_principal.return_value = Principal(user_id=1, role="admin")

        with patch("blueprints.auth.get_auth_service", return_value=auth_service):
            response = client.post(
                "/api/auth/login", json={"username": "admin", "password": "password123"}
            )

        assert response.status_code == 200
        data = response.get_json()
        assert data["user"]["is_admin"] is True
        with flask_app.app_context():
            assert decode_token(data["access_token"])["role"] == "admin"

    def test_login_invalid_credentials(self, client):
        auth_service = Mock()
        auth_service.authenticate_user.return_value = None

        with patch("blueprints.auth.get_auth_service", return_value=auth_service):
            response = client.post(
                "/api/auth/login", json={"username": "jane", "password": "wrong-password"}
            )

        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid username or password"

    def test_change_password(self, client, user_headers):
        auth_service = Mock()

        with patch("blueprints.auth.get_auth_service", return_value=auth_service):
            response = client.post(
                "/api/auth/change-password",
                json={
                    "current_password": "password123",
                    "new_password": "newpassword456",
                    "confirm_password": "newpassword456",
                },
                headers=user_headers,
            )

        assert response.status_code == 200
        auth_service.change_password.assert_called_once_with(7, "password123", "newpassword456")

    def test_change_password_confirmation_mismatch(self, client, user_headers):
        auth_service = Mock()

        with patch("blueprints.auth.get_auth_service", return_value=auth_service):
            response = client.post(
                "/api/auth/change-password",
                json={
                    "current_password": "password123",
                    "new_password": "newpassword456",
                    "confirm_password": "newpassword789",
                },
                headers=user_headers,
            )

        assert response.status_code == 400
        auth_service.change_password.assert_not_called()

    def test_change_password_wrong_current_password(self, client, user_headers):
        auth_service = Mock()
        auth_service.change_password.side_effect = ValueError("Current password is incorrect")

        with patch("blueprints.auth.get_auth_service", return_value=auth_service):
            response = client.post(
                "/api/auth/change-password",
                json={
                    "current_password": "wrong-password",
                    "new_password": "newpassword456",
                    "confirm_password": "newpassword456",
                },
                headers=user_headers,
            )

        assert response.status_code == 400
        assert response.get_json()["error"] == "Current password is incorrect"

    def test_change_password_requires_token(self, client):
        response = client.post(
            "/api/auth/change-password",
            json={"current_password": "a", "new_password": "b", "confirm_password": "b"},
        )

        assert response.status_code == 401


class TestJobsApi:
    """Job browsing, saving and admin management."""

    def test_search_jobs_defaults(self, client):
        job_service = Mock()
        job_service.search_jobs.return_value = [{"id": "job-1", "title": "Engineer"}]

        with patch("blueprints.jobs.get_job_service", return_value=job_service):
            response = client.get("/api/jobs?query=python&is_remote=true&salary_min=50000")

        assert response.status_code == 200
        assert response.get_json() == {
            "jobs": [{"id": "job-1", "title": "Engineer"}],
            "limit": 12,
            "offset": 0,
        }
        kwargs = job_service.search_jobs.call_args.kwargs
        assert kwargs["query"] == "python"
        assert kwargs["is_remote"] is True
        assert kwargs["salary_min"] == 50000
        assert kwargs["limit"] == 12

    def test_search_jobs_bad_number(self, client):
        with patch("blueprints.jobs.get_job_service"):
            response = client.get("/api/jobs?salary_min=lots")

        assert response.status_code == 400
        assert response.get_json()["error"] == "salary_min must be an integer"

    def test_get_job_not_found(self, client):
        job_service = Mock()
        job_service.get_job_by_id.return_value = None

        with patch("blueprints.jobs.get_job_service", return_value=job_service):
            response = client.get("/api/jobs/missing")

        assert response.status_code == 404

    def test_get_job_anonymous_has_no_saved_flag(self, client):
        job_service = Mock()
        job_service.get_job_by_id.return_value = {"id": "job-1"}
        saved_service = Mock()

        with (
            patch("blueprints.jobs.get_job_service", return_value=job_service),
            patch("blueprints.jobs.get_saved_job_service", return_value=saved_service),
        ):
            response = client.get("/api/jobs/job-1")

        assert response.status_code == 200
        assert response.get_json() == {"job": {"id": "job-1"}}
        saved_service.is_saved.assert_not_called()

    def test_get_job_reports_saved_flag(self, client, user_headers):
        job_service = Mock()
        job_service.get_job_by_id.return_value = {"id": "job-1"}
        saved_service = Mock()
        saved_service.is_saved.return_value = True

        with (
            patch("blueprints.jobs.get_job_service", return_value=job_service),
            patch("blueprints.jobs.get_saved_job_service", return_value=saved_service),
        ):
            response = client.get("/api/jobs/job-1", headers=user_headers)

        assert response.status_code == 200
        assert response.get_json()["saved"] is True
        saved_service.is_saved.assert_called_once_with(7, "job-1")

    def test_save_job(self, client, user_headers):
        job_service = Mock()
        job_service.get_job_by_id.return_value = {"id": "job-1"}
        saved_service = Mock()
        saved_service.save_job.return_value = True

        with (
            patch("blueprints.jobs.get_job_service", return_value=job_service),
            patch("blueprints.jobs.get_saved_job_service", return_value=saved_service),
        ):
            response = client.post("/api/jobs/job-1/save", headers=user_headers)

        assert response.status_code == 201
        saved_service.save_job.assert_called_once_with(7, "job-1")

    def test_create_job_requires_token(self, client):
        response = client.post("/api/jobs", json={"title": "Engineer"})

        assert response.status_code == 401

    def test_create_job_forbidden_for_job_seeker(self, client, user_headers):
        job_service = Mock()

        with patch("blueprints.jobs.get_job_service", return_value=job_service):
            response = client.post("/api/jobs", json={"title": "Engineer"}, headers=user_headers)

        assert response.status_code == 403
        assert response.get_json()["error"] == "Admin access required"
        job_service.create_job.assert_not_called()

    def test_create_job_missing_fields(self, client, admin_headers):
        response = client.post("/api/jobs", json={"title": "Engineer"}, headers=admin_headers)

        assert response.status_code == 400
        assert "location" in response.get_json()["error"]

    def test_create_job_passes_admin_capability(self, client, admin_headers):
        job_service = Mock()
        job_service.create_job.return_value = "job-9"

        with patch("blueprints.jobs.get_job_service", return_value=job_service):
            response = client.post(
                "/api/jobs",
                json={
                    "title": "Engineer",
                    "description": "Build things",
                    "location": "Austin",
                    "employment_type": "full-time",
                    "experience_level": "senior",
                    "skills_required": "python, sql",
                    "is_remote": "true",
                },
                headers=admin_headers,
            )

        assert response.status_code == 201
        assert response.get_json()["job_id"] == "job-9"
        args, kwargs = job_service.create_job.call_args
        assert isinstance(args[0], AdminCapability)
        assert args[0].principal.user_id == 1
        assert kwargs["skills_required"] == ["python", "sql"]
        assert kwargs["is_remote"] is True
        assert kwargs["description"] == "Build things"


class TestRecommendationsApi:
    """Recommendations endpoint."""

    def test_requires_token(self, client):
        assert client.get("/api/recommendations").status_code == 401

    def test_returns_recommendations_for_caller(self, client, user_headers):
        recommender = Mock()
        recommender.recommend_for_user.return_value = {
            "has_profile": True,
            "recommendations": [{"id": "job-1", "match_percentage": 80}],
        }

        with patch("blueprints.recommendations.get_job_recommender", return_value=recommender):
            response = client.get("/api/recommendations", headers=user_headers)

        assert response.status_code == 200
        assert response.get_json()["recommendations"][0]["id"] == "job-1"
        recommender.recommend_for_user.assert_called_once_with(7)

    def test_errors_are_sanitized(self, client, user_headers):
        recommender = Mock()
        recommender.recommend_for_user.side_effect = RuntimeError("connection refused")

        with patch("blueprints.recommendations.get_job_recommender", return_value=recommender):
            response = client.get("/api/recommendations", headers=user_headers)

        assert response.status_code == 500
        assert response.get_json()["error"] == "Database operation failed. Please try again."


class TestApplicationsApi:
    """Applications endpoints."""

    def test_submit_application(self, client, user_headers):
        service = Mock()
        service.submit_application.return_value = "app-1"

        with patch("blueprints.applications.get_application_service", return_value=service):
            response = client.post(
                "/api/applications",
                json={
                    "job_id": "job-1",
                    "applicant_name": "Jane",
                    "applicant_email": "jane@example.com",
                },
                headers=user_headers,
            )

        assert response.status_code == 201
        assert response.get_json()["application_id"] == "app-1"
        assert service.submit_application.call_args.kwargs["user_id"] == 7

    def test_duplicate_application(self, client, user_headers):
        service = Mock()
        service.submit_application.side_effect = ValueError("You have already applied for this job")

        with patch("blueprints.applications.get_application_service", return_value=service):
            response = client.post(
                "/api/applications", json={"job_id": "job-1"}, headers=user_headers
            )

        assert response.status_code == 400
        assert response.get_json()["error"] == "You have already applied for this job"

    def test_submit_is_rate_limited(self, client, user_headers):
        service = Mock()
        service.submit_application.return_value = "app-1"

        with patch("blueprints.applications.get_application_service", return_value=service):
            codes = [
                client.post(
                    "/api/applications", json={"job_id": f"job-{i}"}, headers=user_headers
                ).status_code
                for i in range(11)
            ]

        assert codes[:10] == [201] * 10
        assert codes[10] == 429

    def test_list_my_applications_with_counts(self, client, user_headers):
        service = Mock()
        service.get_applications_for_user.return_value = [
            {"id": "app-1", "status": "pending"},
            {"id": "app-2", "status": "rejected"},
        ]

        with patch("blueprints.applications.get_application_service", return_value=service):
            response = client.get("/api/applications", headers=user_headers)

        assert response.status_code == 200
        counts = response.get_json()["counts"]
        assert counts["pending"] == 1
        assert counts["rejected"] == 1
        assert counts["total"] == 2

    def test_update_status_not_found(self, client, admin_headers):
        service = Mock()
        service.update_status.side_effect = ApplicationNotFoundError("Application app-9 not found")

        with patch("blueprints.applications.get_application_service", return_value=service):
            response = client.put(
                "/api/applications/app-9/status", json={"status": "reviewed"}, headers=admin_headers
            )

        assert response.status_code == 404

    def test_update_status_forbidden_for_job_seeker(self, client, user_headers):
        response = client.put(
            "/api/applications/app-1/status", json={"status": "accepted"}, headers=user_headers
        )

        assert response.status_code == 403


class TestCompaniesApi:
    """Company endpoints."""

    def test_list_companies_is_public(self, client):
        service = Mock()
        service.get_all_companies.return_value = [{"id": "c1", "active_jobs_count": 2}]

        with patch("blueprints.companies.get_company_service", return_value=service):
            response = client.get("/api/companies")

        assert response.status_code == 200
        assert response.get_json()["companies"][0]["active_jobs_count"] == 2

    def test_get_company(self, client):
        service = Mock()
        service.get_company_by_id.return_value = {"id": "c1", "name": "Acme"}

        with patch("blueprints.companies.get_company_service", return_value=service):
            response = client.get("/api/companies/c1")

        assert response.status_code == 200
        assert response.get_json()["company"]["name"] == "Acme"
        service.get_company_by_id.assert_called_once_with("c1")

    def test_get_company_not_found(self, client):
        service = Mock()
        service.get_company_by_id.return_value = None

        with patch("blueprints.companies.get_company_service", return_value=service):
            response = client.get("/api/companies/missing")

        assert response.status_code == 404

    def test_delete_company_with_active_jobs_conflicts(self, client, admin_headers):
        service = Mock()
        service.delete_company.side_effect = ValueError(
            "Cannot delete company with 2 active job(s). Deactivate them first."
        )

        with patch("blueprints.companies.get_company_service", return_value=service):
            response = client.delete("/api/companies/c1", headers=admin_headers)

        assert response.status_code == 409


class TestProfileAndSystemApi:
    """Profile and health endpoints."""

    def test_profile_not_found(self, client, user_headers):
        service = Mock()
        service.get_profile.return_value = None

        with patch("blueprints.profile.get_profile_service", return_value=service):
            response = client.get("/api/profile", headers=user_headers)

        assert response.status_code == 404

    def test_save_profile(self, client, user_headers):
        service = Mock()
        service.get_profile.return_value = {"user_id": 7, "skills": ["python"]}

        with patch("blueprints.profile.get_profile_service", return_value=service):
            response = client.put(
                "/api/profile",
                json={"full_name": "Jane", "email": "jane@example.com", "skills": "python"},
                headers=user_headers,
            )

        assert response.status_code == 200
        kwargs = service.save_profile.call_args.kwargs
        assert kwargs["user_id"] == 7
        assert kwargs["skills"] == ["python"]
        assert kwargs["experience_level"] == "entry"

    def test_health_degraded_without_database(self, client):
        with patch("blueprints.system.get_database", side_effect=RuntimeError("no db")):
            response = client.get("/api/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "degraded"
