"""Unit tests for ApplicationService."""

import pytest
from psycopg2 import errors as pg_errors

from services.applications.application_service import (
    DUPLICATE_APPLICATION_MESSAGE,
    ApplicationNotFoundError,
    ApplicationService,
)
from services.auth.principal import AuthorizationError, Principal


@pytest.fixture
def application_service(mock_database):
    """Create an ApplicationService instance with mocked database."""
    return ApplicationService(database=mock_database)


def submit(service, **overrides):
    kwargs = {
        "user_id": 7,
        "job_id": "job-1",
        "applicant_name": "Jane Seeker",
        "applicant_email": "jane@example.com",
    }
    kwargs.update(overrides)
    return service.submit_application(**kwargs)


class TestSubmitApplication:
    """Test cases for submit_application."""

    def test_init_requires_database(self):
        with pytest.raises(ValueError, match="Database is required"):
            ApplicationService(database=None)

    def test_submit_success(self, application_service, mock_cursor):
        # active posting found, no previous application, inserted id
        mock_cursor.fetchone.side_effect = [("job-1",), None, ("app-1",)]

        application_id = submit(
            application_service, applicant_phone="  ", cover_letter=" Hire me "
        )

        assert application_id == "app-1"
        insert_params = mock_cursor.execute.call_args[0][1]
        assert insert_params == (
            "job-1",
            7,
            "Jane Seeker",
            "jane@example.com",
            None,
            None,
            "Hire me",
        )

    def test_submit_to_closed_job(self, application_service, mock_cursor):
        mock_cursor.fetchone.return_value = None

        with pytest.raises(ValueError, match="Job job-1 is not open for applications"):
            submit(application_service)

    def test_submit_twice(self, application_service, mock_cursor):
        mock_cursor.fetchone.side_effect = [("job-1",), (1,)]

        with pytest.raises(ValueError, match=DUPLICATE_APPLICATION_MESSAGE):
            submit(application_service)
        assert mock_cursor.execute.call_count == 2

    def test_submit_race_hits_unique_constraint(self, application_service, mock_cursor):
        """Test a concurrent duplicate caught by the database gets the same message."""
        mock_cursor.fetchone.side_effect = [("job-1",), None]
        mock_cursor.execute.side_effect = [None, None, pg_errors.UniqueViolation()]

        with pytest.raises(ValueError, match=DUPLICATE_APPLICATION_MESSAGE):
            submit(application_service)

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"applicant_name": " "}, "Applicant name is required"),
            ({"applicant_email": "not-an-email"}, "A valid applicant email is required"),
            ({"applicant_email": ""}, "A valid applicant email is required"),
        ],
    )
    def test_submit_validation(self, application_service, mock_database, overrides, message):
        with pytest.raises(ValueError, match=message):
            submit(application_service, **overrides)
        mock_database.get_cursor.assert_not_called()


class TestApplicationQueries:
    """Test cases for listing applications."""

    def test_get_applications_for_user(self, application_service, mock_cursor):
        mock_cursor.description = [("id",), ("status",), ("job_title",)]
        mock_cursor.fetchall.return_value = [("app-1", "pending", "Engineer")]

        applications = application_service.get_applications_for_user(7)

        assert applications == [{"id": "app-1", "status": "pending", "job_title": "Engineer"}]
        assert mock_cursor.execute.call_args[0][1] == (7,)

    def test_get_all_applications_requires_admin(self, application_service):
        with pytest.raises(AuthorizationError):
            application_service.get_all_applications(Principal(user_id=7))

    def test_get_applications_for_job(self, application_service, mock_cursor, admin_capability):
        mock_cursor.description = [("id",)]
        mock_cursor.fetchall.return_value = [("app-1",), ("app-2",)]

        applications = application_service.get_applications_for_job(admin_capability, "job-1")

        assert [a["id"] for a in applications] == ["app-1", "app-2"]

    def test_count_by_status(self):
        counts = ApplicationService.count_by_status(
            [{"status": "pending"}, {"status": "pending"}, {"status": "accepted"}, {}]
        )

        assert counts == {
            "pending": 2,
            "reviewed": 0,
            "accepted": 1,
            "rejected": 0,
            "total": 4,
        }


class TestUpdateStatus:
    """Test cases for update_status."""

    @pytest.mark.parametrize(
        "current,new",
        [
            ("pending", "reviewed"),
            ("pending", "accepted"),
            ("pending", "rejected"),
            ("reviewed", "accepted"),
            ("reviewed", "rejected"),
        ],
    )
    def test_allowed_transitions(self, application_service, mock_cursor, admin_capability, current, new):
        mock_cursor.fetchone.return_value = (current,)

        assert application_service.update_status(admin_capability, "app-1", new) == new
        assert mock_cursor.execute.call_args[0][1] == (new, "app-1")

    @pytest.mark.parametrize(
        "current,new",
        [
            ("accepted", "rejected"),
            ("rejected", "pending"),
            ("reviewed", "pending"),
        ],
    )
    def test_disallowed_transitions(self, application_service, mock_cursor, admin_capability, current, new):
        mock_cursor.fetchone.return_value = (current,)

        with pytest.raises(ValueError, match="Cannot change application status"):
            application_service.update_status(admin_capability, "app-1", new)

    def test_same_status_is_noop(self, application_service, mock_cursor, admin_capability):
        mock_cursor.fetchone.return_value = ("accepted",)

        assert application_service.update_status(admin_capability, "app-1", "accepted") == "accepted"
        assert mock_cursor.execute.call_count == 1

    def test_invalid_status(self, application_service, admin_capability):
        with pytest.raises(ValueError, match="Invalid status"):
            application_service.update_status(admin_capability, "app-1", "hired")

    def test_not_found(self, application_service, mock_cursor, admin_capability):
        mock_cursor.fetchone.return_value = None

        with pytest.raises(ApplicationNotFoundError):
            application_service.update_status(admin_capability, "missing", "reviewed")

    def test_requires_admin(self, application_service):
        with pytest.raises(AuthorizationError):
            application_service.update_status(Principal(user_id=1, role="admin"), "app-1", "reviewed")
