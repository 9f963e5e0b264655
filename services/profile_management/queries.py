"""SQL queries for Profile Management Service."""

GET_PROFILE_BY_USER_ID = """
    SELECT
        id,
        user_id,
        full_name,
        email,
        phone,
        location,
        skills,
        experience_level,
        resume_url,
        created_at,
        updated_at
    FROM profiles
    WHERE user_id = %s
"""

# Profiles are one per user; saving again overwrites the previous values
UPSERT_PROFILE = """
    INSERT INTO profiles (
        user_id,
        full_name,
        email,
        phone,
        location,
        skills,
        experience_level,
        resume_url,
        created_at,
        updated_at
    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
    ON CONFLICT (user_id)
    DO UPDATE SET
        full_name = EXCLUDED.full_name,
        email = EXCLUDED.email,
        phone = EXCLUDED.phone,
        location = EXCLUDED.location,
        skills = EXCLUDED.skills,
        experience_level = EXCLUDED.experience_level,
        resume_url = EXCLUDED.resume_url,
        updated_at = CURRENT_TIMESTAMP
    RETURNING id
"""
