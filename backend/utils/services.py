import os
import sys
from pathlib import Path

# Make the repository root importable so "services.*" resolves
if Path("/app/services").exists():
    sys.path.insert(0, "/app")
else:
    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from config import Config

from services.applications import ApplicationService
from services.auth import AuthService, UserService
from services.companies import CompanyService
from services.jobs import JobService, SavedJobService
from services.profile_management import ProfileService
from services.recommendations import JobRecommender
from services.shared import PostgreSQLDatabase


def build_db_connection_string() -> str:
    """
    Build PostgreSQL connection string from environment variables.

    Checks DATABASE_URL first, then falls back to individual POSTGRES_* variables.

    Returns:
        PostgreSQL connection string
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db = os.getenv("POSTGRES_DB", "job_board_db")
    ssl_mode = os.getenv("POSTGRES_SSL_MODE", "")

    conn_str = f"postgresql://{user}:{password}@{host}:{port}/{db}"
    if ssl_mode:
        conn_str += f"?sslmode={ssl_mode}"
    return conn_str


def get_database() -> PostgreSQLDatabase:
    """Get a database handle backed by the shared connection pool."""
    return PostgreSQLDatabase(connection_string=build_db_connection_string())


def get_user_service() -> UserService:
    return UserService(database=get_database())


def get_auth_service() -> AuthService:
    return AuthService(user_service=get_user_service())


def get_profile_service() -> ProfileService:
    return ProfileService(database=get_database())


def get_job_service() -> JobService:
    return JobService(database=get_database())


def get_saved_job_service() -> SavedJobService:
    return SavedJobService(database=get_database())


def get_company_service() -> CompanyService:
    return CompanyService(database=get_database())


def get_application_service() -> ApplicationService:
    return ApplicationService(database=get_database())


def get_job_recommender() -> JobRecommender:
    """
    Get JobRecommender instance wired to the profile and job services.

    Returns:
        JobRecommender instance
    """
    database = get_database()
    return JobRecommender(
        profile_service=ProfileService(database=database),
        job_service=JobService(database=database),
        min_score=Config.RECOMMENDATION_MIN_SCORE,
        limit=Config.RECOMMENDATION_LIMIT,
    )
