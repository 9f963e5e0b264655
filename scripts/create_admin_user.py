"""Create an admin account.

Self-registration through the API only creates job seeker accounts; admins
are created with this script.

Usage:
    python scripts/create_admin_user.py --username admin --email admin@example.com
    (the password is read from ADMIN_PASSWORD or prompted for)
"""

import argparse
import getpass
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from services.auth import ROLE_ADMIN, UserService
from services.shared import PostgreSQLDatabase

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def build_db_connection_string() -> str:
    """Build PostgreSQL connection string from environment variables."""
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db = os.getenv("POSTGRES_DB", "job_board_db")
    return f"postgresql://{user}:{password}@{host}:{port}/{db}"


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    args = parser.parse_args()

    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")

    user_service = UserService(database=PostgreSQLDatabase(build_db_connection_string()))
    try:
        user_id = user_service.create_user(
            username=args.username, email=args.email, password=password, role=ROLE_ADMIN
        )
    except ValueError as e:
        logger.error(f"Could not create admin user: {e}")
        return 1

    logger.info(f"Created admin user {args.username} (ID: {user_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
