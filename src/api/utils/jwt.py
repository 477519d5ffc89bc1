from datetime import UTC, datetime, timedelta
from typing import Optional, Tuple
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig

LINK_SCOPE = "link"


def generate_jwt(
    user_id: UUID, email: str, name: str = "", expires_delta: timedelta = timedelta(minutes=15)
) -> str:
    """
    Generate an identity JWT, as issued by the identity provider

    Args:
        user_id: User UUID
        email: User email
        name: Display name
        expires_delta: Token expiration duration

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "email": email,
        "name": name,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def create_link_grant_token(
    link_id: UUID, document_id: UUID, role: str
) -> Tuple[str, datetime]:
    """
    Create a short-lived, read-only grant for a shareable link

    The token is scoped to one document and role and never identifies a user.

    Returns:
        (JWT token string, expiry as naive UTC)
    """
    now = datetime.now(UTC)
    expires_at = now + timedelta(minutes=ApplicationConfig.LINK_GRANT_TTL_MINUTES)
    payload = {
        "scope": LINK_SCOPE,
        "link_id": str(link_id),
        "document_id": str(document_id),
        "role": role,
        "exp": expires_at,
        "iat": now,
    }
    token = jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")
    return token, expires_at.replace(tzinfo=None)


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
