"""Experience levels shared by postings, profiles and the match scorer."""

# Ordered from least to most senior; the match scorer ranks levels by position
EXPERIENCE_LEVELS = ("entry", "mid-level", "senior", "executive")
