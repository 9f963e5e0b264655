"""SQL queries for company management."""

# Companies with the number of active postings each one has
GET_ALL_COMPANIES = """
    SELECT
        c.id,
        c.name,
        c.description,
        c.website,
        c.logo_url,
        c.location,
        c.industry,
        c.size,
        c.created_at,
        c.updated_at,
        COUNT(j.id) FILTER (WHERE j.is_active = true) AS active_jobs_count
    FROM companies c
    LEFT JOIN jobs j ON j.company_id = c.id
    GROUP BY c.id
    ORDER BY c.name
"""

GET_COMPANY_BY_ID = """
    SELECT
        id,
        name,
        description,
        website,
        logo_url,
        location,
        industry,
        size,
        created_at,
        updated_at
    FROM companies
    WHERE id = %s
"""

COUNT_ACTIVE_JOBS_FOR_COMPANY = """
    SELECT COUNT(*)
    FROM jobs
    WHERE company_id = %s AND is_active = true
"""

INSERT_COMPANY = """
    INSERT INTO companies (
        name, description, website, logo_url, location, industry, size, created_at, updated_at
    ) VALUES (%s, %s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
    RETURNING id
"""

UPDATE_COMPANY_TEMPLATE = """
    UPDATE companies
    SET {assignments}, updated_at = CURRENT_TIMESTAMP
    WHERE id = %s
"""

DELETE_COMPANY = """
    DELETE FROM companies
    WHERE id = %s
"""
