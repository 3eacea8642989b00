def redact_user(user_id: str | None) -> str:
    """
    Redact a user id for logging purposes.
    Shows the first 4 characters followed by ***.
    """
    if not user_id:
        return "None"
    if len(user_id) <= 4:
        return "***"
    return f"{user_id[:4]}***"
