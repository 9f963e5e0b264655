"""SQL queries for job postings and saved jobs."""

# Columns returned for every posting, joined with its company
JOB_SELECT = """
    SELECT
        j.id,
        j.title,
        j.description,
        j.location,
        j.employment_type,
        j.experience_level,
        j.salary_min,
        j.salary_max,
        j.skills_required,
        j.is_remote,
        j.is_featured,
        j.is_active,
        j.status,
        j.company_id,
        j.posted_by,
        j.created_at,
        j.updated_at,
        c.name AS company_name,
        c.logo_url AS company_logo_url,
        c.location AS company_location
    FROM jobs j
    LEFT JOIN companies c ON j.company_id = c.id
"""

# Active postings for recommendations, newest first
GET_ACTIVE_JOBS = (
    JOB_SELECT
    + """
    WHERE j.is_active = true
    ORDER BY j.created_at DESC
"""
)

GET_JOB_BY_ID = (
    JOB_SELECT
    + """
    WHERE j.id = %s
"""
)

# Search ordering: featured postings first, then newest
SEARCH_JOBS_ORDER = " ORDER BY j.is_featured DESC, j.created_at DESC"

INSERT_JOB = """
    INSERT INTO jobs (
        title,
        description,
        location,
        employment_type,
        experience_level,
        salary_min,
        salary_max,
        skills_required,
        is_remote,
        is_featured,
        is_active,
        status,
        company_id,
        posted_by,
        created_at,
        updated_at
    ) VALUES (
        %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, true, 'active', %s, %s,
        CURRENT_TIMESTAMP, CURRENT_TIMESTAMP
    )
    RETURNING id
"""

# Partial update; the column list is built from an allow-list in JobService
UPDATE_JOB_TEMPLATE = """
    UPDATE jobs
    SET {assignments}, updated_at = CURRENT_TIMESTAMP
    WHERE id = %s
"""

DEACTIVATE_JOB = """
    UPDATE jobs
    SET is_active = false, updated_at = CURRENT_TIMESTAMP
    WHERE id = %s
"""

MARK_JOB_HIRED = """
    UPDATE jobs
    SET status = 'hired', is_active = false, updated_at = CURRENT_TIMESTAMP
    WHERE id = %s AND is_active = true
"""

# Saved jobs
SAVE_JOB = """
    INSERT INTO saved_jobs (user_id, job_id, created_at)
    VALUES (%s, %s, CURRENT_TIMESTAMP)
    ON CONFLICT (user_id, job_id) DO NOTHING
"""

UNSAVE_JOB = """
    DELETE FROM saved_jobs
    WHERE user_id = %s AND job_id = %s
"""

IS_JOB_SAVED = """
    SELECT 1
    FROM saved_jobs
    WHERE user_id = %s AND job_id = %s
"""

GET_SAVED_JOBS_FOR_USER = """
    SELECT
        sj.id AS saved_job_id,
        sj.created_at AS saved_at,
        j.id,
        j.title,
        j.location,
        j.employment_type,
        j.experience_level,
        j.salary_min,
        j.salary_max,
        j.is_remote,
        j.is_active,
        j.created_at,
        c.name AS company_name,
        c.logo_url AS company_logo_url
    FROM saved_jobs sj
    INNER JOIN jobs j ON sj.job_id = j.id
    LEFT JOIN companies c ON j.company_id = c.id
    WHERE sj.user_id = %s
    ORDER BY sj.created_at DESC
"""
