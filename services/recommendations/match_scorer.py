"""
Match Scorer

Scores active job postings against a job seeker's profile and returns the
best matches. All functions here are pure: they read their arguments, take
the current time as a parameter and never touch the database.

Profiles and postings are plain dictionaries as returned by the profile and
job services:

- profile: ``skills``, ``experience_level``, ``location``
- posting: ``id``, ``skills_required``, ``experience_level``, ``location``,
  ``is_remote``, ``created_at``
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from services.shared.experience import EXPERIENCE_LEVELS

_EXPERIENCE_RANK = {level: rank for rank, level in enumerate(EXPERIENCE_LEVELS)}

SKILLS_WEIGHT = 0.4
EXPERIENCE_WEIGHT = 0.3
LOCATION_WEIGHT = 0.2
RECENCY_WEIGHT = 0.1

EXPERIENCE_STEP_PENALTY = 0.3
RECENCY_WINDOW_DAYS = 30

MIN_MATCH_SCORE = 0.3
MAX_RECOMMENDATIONS = 6

_SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class MatchResult:
    """A posting paired with its match score (0.0-1.0).

    ``explanation`` maps each applicable factor to its raw 0-1 score.
    """

    job: dict[str, Any]
    score: float
    explanation: dict[str, float] = field(default_factory=dict)

    @property
    def job_id(self) -> Any:
        return self.job.get("id")

    @property
    def match_percentage(self) -> int:
        return round(self.score * 100)

    @property
    def match_label(self) -> str:
        return match_label(self.match_percentage)


def _skill_items(raw: Any) -> list[str]:
    """Split a skills field into lowercase, non-blank tags in their original order.

    Accepts a list of strings, a JSON array string, or a comma/semicolon
    separated string. Non-strings are dropped.
    """
    if not raw:
        return []

    if isinstance(raw, str):
        items: Iterable[Any]
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            parsed = None
        items = parsed if isinstance(parsed, list) else re.split(r"[;,]", raw)
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        return []

    skills = (item.strip().lower() for item in items if isinstance(item, str))
    return [skill for skill in skills if skill]


def normalize_skills(raw: Any) -> list[str]:
    """Normalize a skills field into lowercase, de-duplicated tags, first appearance kept."""
    return list(dict.fromkeys(_skill_items(raw)))


def normalize_required_skills(raw: Any) -> list[str]:
    """Normalize a posting's required skills. Repeated entries each count toward the total."""
    return _skill_items(raw)


def parse_experience_level(value: Any) -> int | None:
    """Map an experience level onto its rank (entry=0 ... executive=3), or None."""
    if not isinstance(value, str):
        return None
    normalized = re.sub(r"[\s_]+", "-", value.strip().lower())
    return _EXPERIENCE_RANK.get(normalized)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a posting timestamp. Naive values are taken to be UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def score_skills(profile_skills: Sequence[str], required_skills: Sequence[str]) -> float | None:
    """
    Fraction of required skills covered by the profile (0-1 scale).

    A required skill counts as covered when some profile skill contains it
    or is contained by it ("react" covers "react.js" and the reverse).

    Returns:
        Skills score, or None when either side has no skills
    """
    if not profile_skills or not required_skills:
        return None

    matched = sum(
        1
        for required in required_skills
        if any(skill in required or required in skill for skill in profile_skills)
    )
    return matched / max(len(required_skills), 1)


def score_experience(profile_level: Any, job_level: Any) -> float | None:
    """
    Experience level closeness (0-1 scale).

    Each level of difference costs 0.3: same level 1.0, one apart 0.7, two
    apart 0.4, three apart 0.1.

    Returns:
        Experience score, or None when either level is unknown
    """
    profile_rank = parse_experience_level(profile_level)
    job_rank = parse_experience_level(job_level)
    if profile_rank is None or job_rank is None:
        return None

    level_diff = abs(job_rank - profile_rank)
    return max(0.0, 1.0 - EXPERIENCE_STEP_PENALTY * level_diff)


def score_location(profile_location: Any, job_location: Any, is_remote: bool) -> float | None:
    """
    Location fit (0 or 1).

    Remote postings always fit. Otherwise the locations fit when either one
    contains the other, ignoring case ("Austin" fits "Austin, TX").

    Returns:
        Location score, or None for an on-site posting when either location
        is missing
    """
    if is_remote:
        return 1.0

    profile_loc = profile_location.strip().lower() if isinstance(profile_location, str) else ""
    job_loc = job_location.strip().lower() if isinstance(job_location, str) else ""
    if not profile_loc or not job_loc:
        return None

    return 1.0 if profile_loc in job_loc or job_loc in profile_loc else 0.0


def score_recency(created_at: Any, now: datetime) -> float | None:
    """
    Posting freshness (0-1 scale), decaying linearly to 0 at 30 days.

    Returns:
        Recency score, or None when the posting date cannot be read
    """
    posted_at = parse_timestamp(created_at)
    if posted_at is None:
        return None
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    days_since_posted = (now - posted_at).total_seconds() / _SECONDS_PER_DAY
    if days_since_posted <= 0:
        return 1.0  # Future-dated postings count as brand new
    return max(0.0, 1.0 - days_since_posted / RECENCY_WINDOW_DAYS)


def calculate_match_score(
    profile: dict[str, Any], job: dict[str, Any], now: datetime | None = None
) -> tuple[float, dict[str, float]]:
    """
    Calculate how well one posting matches a profile.

    Factors and weights:
    - Skills: 40%
    - Experience level: 30%
    - Location / remote: 20%
    - Recency: 10%

    A factor that cannot be evaluated (missing or unreadable data) is left
    out and the remaining weights are renormalized, so missing data is not
    penalized.

    Args:
        profile: Candidate profile dictionary
        job: Job posting dictionary
        now: Reference time for recency (defaults to the current UTC time)

    Returns:
        Tuple of (score from 0-1, explanation mapping factor name to its raw
        0-1 score)
    """
    if now is None:
        now = datetime.now(UTC)

    factors = (
        (
            "skills_match",
            SKILLS_WEIGHT,
            score_skills(
                normalize_skills(profile.get("skills")),
                normalize_required_skills(job.get("skills_required")),
            ),
        ),
        (
            "experience_match",
            EXPERIENCE_WEIGHT,
            score_experience(profile.get("experience_level"), job.get("experience_level")),
        ),
        (
            "location_match",
            LOCATION_WEIGHT,
            score_location(profile.get("location"), job.get("location"), bool(job.get("is_remote"))),
        ),
        ("recency", RECENCY_WEIGHT, score_recency(job.get("created_at"), now)),
    )

    explanation: dict[str, float] = {}
    weighted_sum = 0.0
    total_weight = 0.0
    for name, weight, factor_score in factors:
        if factor_score is None:
            continue
        explanation[name] = round(factor_score, 4)
        weighted_sum += factor_score * weight
        total_weight += weight

    if total_weight <= 0:
        return 0.0, explanation

    final_score = max(0.0, min(1.0, weighted_sum / total_weight))
    return final_score, explanation


def _tie_break_key(result: MatchResult) -> tuple[float, float, str]:
    posted_at = parse_timestamp(result.job.get("created_at"))
    posted_ts = posted_at.timestamp() if posted_at else float("-inf")
    return (-result.score, -posted_ts, str(result.job_id or ""))


def score_and_rank(
    profile: dict[str, Any] | None,
    postings: Iterable[dict[str, Any]],
    now: datetime | None = None,
    min_score: float = MIN_MATCH_SCORE,
    limit: int = MAX_RECOMMENDATIONS,
) -> list[MatchResult]:
    """
    Score postings against a profile and return the best matches.

    Results are ordered by score descending; equal scores put the newer
    posting first, then the smaller job id. Only postings scoring strictly
    above ``min_score`` are kept, and at most ``limit`` are returned.

    Args:
        profile: Candidate profile, or None for a user without a profile
        postings: Active job postings
        now: Reference time for recency (defaults to the current UTC time)
        min_score: Exclusive lower bound for returned scores
        limit: Maximum number of results

    Returns:
        Ranked list of MatchResult (empty when there is no profile)
    """
    if profile is None:
        return []
    if now is None:
        now = datetime.now(UTC)

    results = []
    for job in postings:
        score, explanation = calculate_match_score(profile, job, now)
        results.append(MatchResult(job=job, score=score, explanation=explanation))

    results.sort(key=_tie_break_key)
    return [result for result in results if result.score > min_score][:limit]


def match_label(percentage: int) -> str:
    """Human-readable label for a match percentage."""
    if percentage >= 80:
        return "Excellent Match"
    if percentage >= 60:
        return "Good Match"
    if percentage >= 40:
        return "Fair Match"
    return "Potential Match"
