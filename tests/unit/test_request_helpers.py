"""Unit tests for backend request parsing and error sanitizing helpers."""

import pytest
from utils.errors import _sanitize_error_message
from utils.params import parse_bool, parse_optional_int, parse_skills


class TestParams:
    """Test cases for request value parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [("true", True), ("1", True), (False, False), ("no", False), (None, None), ("maybe", None)],
    )
    def test_parse_bool(self, value, expected):
        assert parse_bool(value) is expected

    def test_parse_optional_int(self):
        assert parse_optional_int("12", "limit") == 12
        assert parse_optional_int("", "limit") is None
        assert parse_optional_int(None, "limit") is None

    @pytest.mark.parametrize("value", ["twelve", True, 1.5j])
    def test_parse_optional_int_rejects(self, value):
        with pytest.raises(ValueError, match="limit must be an integer"):
            parse_optional_int(value, "limit")

    def test_parse_skills(self):
        assert parse_skills("python, sql ,,") == ["python", "sql"]
        assert parse_skills([" Go ", "", 3]) == ["Go"]
        assert parse_skills(None) == []
        with pytest.raises(ValueError, match="skills must be a list of strings"):
            parse_skills({"python": True})


class TestSanitizeErrorMessage:
    """Test cases for _sanitize_error_message."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (RuntimeError("connection to server failed"), "Database operation failed. Please try again."),
            (RuntimeError("JWT signing key missing"), "Authentication is misconfigured. Please contact support."),
            (RuntimeError("cannot open /etc/app.conf"), "Request could not be processed."),
            (RuntimeError("boom"), "An unexpected error occurred. Please try again later."),
        ],
    )
    def test_messages(self, error, expected):
        assert _sanitize_error_message(error) == expected
