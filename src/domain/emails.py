from typing import Optional

from email_validator import EmailNotValidError, validate_email


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_email(email: str) -> Optional[str]:
    """
    Validate an email address syntactically and return its normalised form.

    Returns None when the address is malformed. Deliverability is not checked.
    """
    if not isinstance(email, str) or not email.strip():
        return None
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None
    return normalize_email(email)
