"""
Shared infrastructure for services.

This package contains shared building blocks used across the job board
services, such as the database abstraction and structured logging.
"""

from .database import Database, PostgreSQLDatabase, close_all_pools, row_to_dict, rows_to_dicts
from .experience import EXPERIENCE_LEVELS
from .structured_logging import get_structured_logger

__all__ = [
    "Database",
    "EXPERIENCE_LEVELS",
    "PostgreSQLDatabase",
    "close_all_pools",
    "get_structured_logger",
    "row_to_dict",
    "rows_to_dicts",
]
