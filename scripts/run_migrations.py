#!/usr/bin/env python3
"""
Run database migrations.

Applies every SQL file in migrations/ in filename order. Statements are
written with IF NOT EXISTS, so re-running is safe.

Usage:
    python scripts/run_migrations.py [--database-url URL] [--verbose]
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import psycopg2

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def get_db_connection(database_url: str | None = None) -> psycopg2.extensions.connection:
    """Connect using DATABASE_URL or the POSTGRES_* environment variables."""
    dsn = database_url or os.getenv("DATABASE_URL")
    try:
        if dsn:
            conn = psycopg2.connect(dsn)
        else:
            conn = psycopg2.connect(
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=os.getenv("POSTGRES_PORT", "5432"),
                dbname=os.getenv("POSTGRES_DB", "job_board_db"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            )
    except psycopg2.Error as e:
        logger.error(f"Failed to connect to database: {e}")
        sys.exit(1)
    conn.autocommit = True
    return conn


def run_migration(conn: psycopg2.extensions.connection, migration_file: Path, verbose: bool = False) -> bool:
    """Run a single migration file.

    Returns:
        True if migration succeeded, False otherwise
    """
    try:
        migration_sql = migration_file.read_text(encoding="utf-8")
        if verbose:
            logger.info(f"Running migration: {migration_file.name}")

        with conn.cursor() as cur:
            cur.execute(migration_sql)

        logger.info(f"Migration completed: {migration_file.name}")
        return True
    except (
        psycopg2.errors.DuplicateTable,
        psycopg2.errors.DuplicateObject,
        psycopg2.errors.DuplicateColumn,
    ) as e:
        logger.info(f"Migration already applied (skipped): {migration_file.name} - {e}")
        return True
    except psycopg2.Error as e:
        logger.error(f"Migration failed: {migration_file.name} - {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description="Run database migrations")
    parser.add_argument("--database-url", help="PostgreSQL URL (default: DATABASE_URL env var)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed information")
    args = parser.parse_args()

    migration_files = sorted(MIGRATIONS_DIR.glob("*.sql"))
    if not migration_files:
        logger.warning(f"No migrations found in {MIGRATIONS_DIR}")
        sys.exit(0)

    conn = get_db_connection(args.database_url)
    try:
        failed = [f.name for f in migration_files if not run_migration(conn, f, args.verbose)]
    finally:
        conn.close()

    logger.info(f"Summary: {len(migration_files) - len(failed)}/{len(migration_files)} migrations succeeded")
    if failed:
        for name in failed:
            logger.warning(f"  - {name}: FAILED")
        sys.exit(1)


if __name__ == "__main__":
    main()
