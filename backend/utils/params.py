"""Helpers for reading query-string and JSON request values."""

from typing import Any


def parse_bool(value: Any) -> bool | None:
    """Parse a boolean flag ("true"/"false"/"1"/"0" or a JSON bool).

    Returns None when the value is absent or unrecognized.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def parse_optional_int(value: Any, field_name: str) -> int | None:
    """Parse an optional integer value.

    Raises:
        ValueError: If the value is present but not an integer
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{field_name} must be an integer") from e


def parse_skills(value: Any) -> list[str]:
    """Accept skills as a JSON list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    if isinstance(value, list):
        return [s.strip() for s in value if isinstance(s, str) and s.strip()]
    raise ValueError("skills must be a list of strings")
