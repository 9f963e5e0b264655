import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
repo_root = Path(__file__).resolve().parents[1]
environment = os.getenv("ENVIRONMENT", "development")
env_file = repo_root / f".env.{environment}"
if env_file.exists():
    load_dotenv(env_file, override=True)
else:
    env_path = repo_root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=True)
load_dotenv()


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


class Config:
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY") or "dev-secret-key-change-in-production"

    # JWT configuration
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or SECRET_KEY
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"

    # CORS configuration: allow production frontend origin(s) via env (comma-separated)
    _cors_env = os.getenv("CORS_ORIGINS", "").strip()
    CORS_ORIGINS = (
        [o.strip() for o in _cors_env.split(",") if o.strip()]
        if _cors_env
        else ["http://localhost:5173", "http://localhost:3000"]
    )

    # Recommendations
    RECOMMENDATION_MIN_SCORE = _env_float("RECOMMENDATION_MIN_SCORE", 0.3)
    RECOMMENDATION_LIMIT = _env_int("RECOMMENDATION_LIMIT", 6)

    # Job search paging
    JOBS_PER_PAGE = 12
    MAX_JOBS_PER_PAGE = 100
