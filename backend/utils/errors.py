def _sanitize_error_message(error: Exception) -> str:
    """Sanitize error messages to avoid leaking sensitive information.

    Args:
        error: Exception object

    Returns:
        Sanitized error message safe for client display
    """
    error_str = str(error).lower()

    if "password" in error_str or "connection" in error_str or "database" in error_str:
        return "Database operation failed. Please try again."

    if "secret" in error_str or ("jwt" in error_str and "key" in error_str):
        return "Authentication is misconfigured. Please contact support."

    if "/" in str(error) or "\\" in str(error):
        return "Request could not be processed."

    return "An unexpected error occurred. Please try again later."
