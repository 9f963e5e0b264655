"""
Job Recommender Service

Loads a job seeker's profile and the active postings, then ranks the
postings with the match scorer.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from services.jobs.job_service import JobService
from services.profile_management.profile_service import ProfileService
from services.shared.structured_logging import get_structured_logger

from .match_scorer import MAX_RECOMMENDATIONS, MIN_MATCH_SCORE, MatchResult, score_and_rank


def serialize_match(result: MatchResult) -> dict[str, Any]:
    """Flatten a MatchResult into the JSON shape returned by the API."""
    return {
        **result.job,
        "match_score": round(result.score, 4),
        "match_percentage": result.match_percentage,
        "match_label": result.match_label,
        "match_explain": result.explanation,
    }


class JobRecommender:
    """
    Service for recommending postings to job seekers.

    Only reads: nothing is written back, and results are not cached.
    """

    def __init__(
        self,
        profile_service: ProfileService,
        job_service: JobService,
        min_score: float = MIN_MATCH_SCORE,
        limit: int = MAX_RECOMMENDATIONS,
    ):
        """
        Initialize the job recommender.

        Args:
            profile_service: Source of job seeker profiles
            job_service: Source of active postings
            min_score: Exclusive lower bound for recommended scores
            limit: Maximum number of recommendations

        Raises:
            ValueError: If a service is missing
        """
        if not profile_service:
            raise ValueError("ProfileService is required")
        if not job_service:
            raise ValueError("JobService is required")

        self.profile_service = profile_service
        self.job_service = job_service
        self.min_score = min_score
        self.limit = limit

    def recommend_for_profile(
        self, profile: dict[str, Any] | None, now: datetime | None = None
    ) -> list[MatchResult]:
        """
        Rank the active postings for an already-loaded profile.

        Returns:
            Ranked matches; empty when profile is None
        """
        if profile is None:
            return []

        jobs = self.job_service.get_active_jobs()
        return score_and_rank(
            profile, jobs, now=now or datetime.now(UTC), min_score=self.min_score, limit=self.limit
        )

    def recommend_for_user(self, user_id: int, now: datetime | None = None) -> dict[str, Any]:
        """
        Recommend postings for a user.

        A user without a profile gets no recommendations; ``has_profile``
        lets the caller tell that apart from a profile with no good matches.

        Args:
            user_id: User to recommend for
            now: Reference time for recency (defaults to the current UTC time)

        Returns:
            Dictionary with ``has_profile`` (bool) and ``recommendations``
            (list of serialized matches, best first)
        """
        log = get_structured_logger(__name__, user_id=user_id)

        profile = self.profile_service.get_profile(user_id)
        if profile is None:
            log.info("No profile found, skipping recommendations")
            return {"has_profile": False, "recommendations": []}

        matches = self.recommend_for_profile(profile, now=now)
        if matches:
            log.info(
                f"Recommended {len(matches)} job(s) (top score: {matches[0].score:.2f})"
            )
        else:
            log.info("No jobs scored above the recommendation threshold")

        return {
            "has_profile": True,
            "recommendations": [serialize_match(match) for match in matches],
        }
