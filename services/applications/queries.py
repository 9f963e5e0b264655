"""SQL queries for job applications."""

_APPLICATION_SELECT = """
    SELECT
        a.id,
        a.job_id,
        a.user_id,
        a.applicant_name,
        a.applicant_email,
        a.applicant_phone,
        a.resume_url,
        a.cover_letter,
        a.status,
        a.created_at,
        a.updated_at,
        j.title AS job_title,
        j.location AS job_location,
        c.name AS company_name
    FROM job_applications a
    INNER JOIN jobs j ON a.job_id = j.id
    LEFT JOIN companies c ON j.company_id = c.id
"""

GET_APPLICATIONS_FOR_USER = (
    _APPLICATION_SELECT
    + """
    WHERE a.user_id = %s
    ORDER BY a.created_at DESC
"""
)

GET_ALL_APPLICATIONS = (
    _APPLICATION_SELECT
    + """
    ORDER BY a.created_at DESC
"""
)

GET_APPLICATIONS_FOR_JOB = (
    _APPLICATION_SELECT
    + """
    WHERE a.job_id = %s
    ORDER BY a.created_at DESC
"""
)

GET_APPLICATION_STATUS = """
    SELECT status
    FROM job_applications
    WHERE id = %s
"""

GET_ACTIVE_JOB_FOR_APPLICATION = """
    SELECT id
    FROM jobs
    WHERE id = %s AND is_active = true AND status = 'active'
"""

# One application per (user, job); the unique index enforces it as well
HAS_APPLIED = """
    SELECT 1
    FROM job_applications
    WHERE user_id = %s AND job_id = %s
"""

INSERT_APPLICATION = """
    INSERT INTO job_applications (
        job_id,
        user_id,
        applicant_name,
        applicant_email,
        applicant_phone,
        resume_url,
        cover_letter,
        status,
        created_at,
        updated_at
    ) VALUES (%s, %s, %s, %s, %s, %s, %s, 'pending', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
    RETURNING id
"""

UPDATE_APPLICATION_STATUS = """
    UPDATE job_applications
    SET status = %s, updated_at = CURRENT_TIMESTAMP
    WHERE id = %s
"""
