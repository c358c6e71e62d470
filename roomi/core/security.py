def redact_email(email: str | None) -> str:
    """
    Redact an e-mail address for logging purposes.
    Keeps the first character of the local part and the full domain.
    """
    if not email:
        return "None"
    local, sep, domain = email.partition("@")
    if not sep:
        return f"{email[:1]}***"
    return f"{local[:1]}***@{domain}"
