import logging
from functools import lru_cache
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.local_storage import LocalStorage
from src.adapter.services.log_notifier import LogNotifier
from src.adapter.services.memory_cache_store import MemoryCacheStore
from src.adapter.services.redis_cache_store import RedisCacheStore
from src.adapter.services.smtp_notifier import SmtpNotifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import LINK_SCOPE, verify_jwt
from src.app.services.access_cache import AccessCache
from src.app.services.notifier import INotifier
from src.app.services.storage import IStorage
from src.domain.emails import normalize_email
from src.domain.entities import Identity

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_access_cache() -> AccessCache:
    if ApplicationConfig.CACHE_BACKEND == "memory":
        store = MemoryCacheStore(key_prefix=ApplicationConfig.CACHE_KEY_PREFIX)
    else:
        store = RedisCacheStore.from_url(
            ApplicationConfig.REDIS_URL, key_prefix=ApplicationConfig.CACHE_KEY_PREFIX
        )
    logger.info(f"Access cache backend: {ApplicationConfig.CACHE_BACKEND}")
    return AccessCache(
        store,
        max_listing_pages=ApplicationConfig.CACHE_MAX_LISTING_PAGES,
        file_info_ttl=ApplicationConfig.CACHE_FILE_INFO_TTL,
        file_users_ttl=ApplicationConfig.CACHE_FILE_USERS_TTL,
        user_role_ttl=ApplicationConfig.CACHE_USER_ROLE_TTL,
        file_list_ttl=ApplicationConfig.CACHE_FILE_LIST_TTL,
        annotations_ttl=ApplicationConfig.CACHE_ANNOTATIONS_TTL,
    )


@lru_cache
def get_notifier() -> INotifier:
    if ApplicationConfig.NOTIFIER_BACKEND == "smtp":
        return SmtpNotifier(
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            from_address=ApplicationConfig.SMTP_FROM_ADDRESS,
            app_base_url=ApplicationConfig.APP_BASE_URL,
            username=ApplicationConfig.SMTP_USERNAME,
            password=ApplicationConfig.SMTP_PASSWORD,
            use_tls=ApplicationConfig.SMTP_USE_TLS,
        )
    return LogNotifier()


@lru_cache
def get_storage() -> IStorage:
    return LocalStorage(ApplicationConfig.STORAGE_DIR)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify the identity JWT from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, email, name

    Raises:
        HTTPException: 401 if token is invalid, expired, or a link grant
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if (
        payload is None
        or payload.get("scope") == LINK_SCOPE
        or "user_id" not in payload
        or "email" not in payload
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload


async def get_current_identity(
    current_user: dict = Depends(get_current_user),
) -> Identity:
    try:
        return Identity(
            id=UUID(current_user["user_id"]),
            email=normalize_email(current_user["email"]),
            name=current_user.get("name") or "",
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


async def get_link_grant(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract a link grant issued by POST /links/access.

    Returns:
        Decoded JWT payload containing link_id, document_id, role

    Raises:
        HTTPException: 401 if token is invalid, expired, or not a link grant
    """
    payload = verify_jwt(credentials.credentials)

    if payload is None or payload.get("scope") != LINK_SCOPE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired link grant",
        )

    return payload
