"""
Access Cache

Business key-space over a generic cache store. No entry is authoritative:
every read path has a fallback to the relation store, and every mutator
deletes the entries its change could have staled.

Key families:
    file_info:{document_id}                  document metadata
    file_users:{document_id}                 owner + members with names
    user_file_role:{document_id}:{email}     resolved role of one identity
    user_files:{user_id}:{page}:{sort}       one page of a user's listing
    file_annotations:{document_id}           annotation snapshot
"""

import logging
from typing import Any, Iterable, List, Optional
from uuid import UUID

from src.app.services.cache_store import CacheError, ICacheStore
from src.domain.entities import SortOrder

logger = logging.getLogger(__name__)

FILE_INFO_PREFIX = "file_info"
FILE_USERS_PREFIX = "file_users"
USER_FILE_ROLE_PREFIX = "user_file_role"
USER_FILES_PREFIX = "user_files"
FILE_ANNOTATIONS_PREFIX = "file_annotations"


class AccessCache:
    """
    Read-through / write-invalidate cache for access state.

    Every operation degrades to a miss or a no-op when the store fails, so a
    cache outage never fails a request.
    """

    def __init__(
        self,
        store: ICacheStore,
        max_listing_pages: int = 10,
        file_info_ttl: int = 600,
        file_users_ttl: int = 300,
        user_role_ttl: int = 300,
        file_list_ttl: int = 180,
        annotations_ttl: int = 600,
    ):
        self.store = store
        self.max_listing_pages = max_listing_pages
        self.file_info_ttl = file_info_ttl
        self.file_users_ttl = file_users_ttl
        self.user_role_ttl = user_role_ttl
        self.file_list_ttl = file_list_ttl
        self.annotations_ttl = annotations_ttl

    # ------------------------------------------------------------------
    # Generic operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await self.store.get(key)
        except (CacheError, OSError) as e:
            logger.warning(f"Cache GET failed for {key}, falling back to store: {e}")
            return None
        logger.debug(f"Cache {'HIT' if value is not None else 'MISS'}: {key}")
        return value

    async def set(self, key: str, value: Any, ttl: int) -> None:
        try:
            await self.store.set(key, value, ttl)
        except (CacheError, OSError) as e:
            logger.warning(f"Cache SET failed for {key}: {e}")
            return
        logger.debug(f"Cache SET: {key} (TTL {ttl}s)")

    async def delete(self, key: str) -> bool:
        try:
            deleted = await self.store.delete(key)
        except (CacheError, OSError) as e:
            logger.warning(f"Cache DEL failed for {key}: {e}")
            return False
        logger.debug(f"Cache DEL: {key}")
        return deleted

    async def delete_by_prefix(self, prefix: str) -> int:
        """
        Best-effort deletion of every derived key under a prefix.

        The store has no enumeration primitive, so the plausible keys are
        generated from the known key layout. Listing pages past
        max_listing_pages are never cached, which keeps this exhaustive for
        the user_files family.

        Returns:
            Number of keys that existed and were deleted
        """
        keys = self._expand_prefix(prefix)
        if keys is None:
            logger.warning(f"Cannot enumerate keys for prefix {prefix}, nothing deleted")
            return 0
        deleted = 0
        for key in keys:
            if await self.delete(key):
                deleted += 1
        logger.debug(f"Cache DEL prefix {prefix}: {deleted} keys")
        return deleted

    def _expand_prefix(self, prefix: str) -> Optional[List[str]]:
        parts = prefix.rstrip(":*").split(":")
        family, args = parts[0], parts[1:]

        if family == USER_FILES_PREFIX and len(args) == 1:
            user_id = args[0]
            return [
                f"{USER_FILES_PREFIX}:{user_id}:{page}:{sort.value}"
                for sort in SortOrder
                for page in range(self.max_listing_pages)
            ]
        if family == USER_FILE_ROLE_PREFIX and len(args) == 2:
            return [f"{USER_FILE_ROLE_PREFIX}:{args[0]}:{args[1]}"]
        if family in (FILE_INFO_PREFIX, FILE_USERS_PREFIX, FILE_ANNOTATIONS_PREFIX) and len(args) == 1:
            return [f"{family}:{args[0]}"]
        return None

    # ------------------------------------------------------------------
    # Key generation
    # ------------------------------------------------------------------

    @staticmethod
    def file_info_key(document_id: UUID) -> str:
        return f"{FILE_INFO_PREFIX}:{document_id}"

    @staticmethod
    def file_users_key(document_id: UUID) -> str:
        return f"{FILE_USERS_PREFIX}:{document_id}"

    @staticmethod
    def user_file_role_key(document_id: UUID, email: str) -> str:
        return f"{USER_FILE_ROLE_PREFIX}:{document_id}:{email}"

    @staticmethod
    def user_files_key(user_id: UUID, page: int, sort: SortOrder) -> str:
        return f"{USER_FILES_PREFIX}:{user_id}:{page}:{SortOrder(sort).value}"

    @staticmethod
    def file_annotations_key(document_id: UUID) -> str:
        return f"{FILE_ANNOTATIONS_PREFIX}:{document_id}"

    # ------------------------------------------------------------------
    # File metadata
    # ------------------------------------------------------------------

    async def get_file_info(self, document_id: UUID) -> Optional[dict]:
        return await self.get(self.file_info_key(document_id))

    async def set_file_info(self, document_id: UUID, info: dict) -> None:
        await self.set(self.file_info_key(document_id), info, self.file_info_ttl)

    async def delete_file_info(self, document_id: UUID) -> None:
        await self.delete(self.file_info_key(document_id))

    # ------------------------------------------------------------------
    # File user list
    # ------------------------------------------------------------------

    async def get_file_users(self, document_id: UUID) -> Optional[List[dict]]:
        return await self.get(self.file_users_key(document_id))

    async def set_file_users(self, document_id: UUID, users: List[dict]) -> None:
        await self.set(self.file_users_key(document_id), users, self.file_users_ttl)

    async def delete_file_users(self, document_id: UUID) -> None:
        await self.delete(self.file_users_key(document_id))

    # ------------------------------------------------------------------
    # (file, user) role
    # ------------------------------------------------------------------

    async def get_user_role(self, document_id: UUID, email: str) -> Optional[str]:
        cached = await self.get(self.user_file_role_key(document_id, email))
        if isinstance(cached, dict):
            return cached.get("role")
        return None

    async def set_user_role(self, document_id: UUID, email: str, role: str) -> None:
        await self.set(
            self.user_file_role_key(document_id, email), {"role": role}, self.user_role_ttl
        )

    async def delete_user_role(self, document_id: UUID, email: str) -> None:
        await self.delete(self.user_file_role_key(document_id, email))

    # ------------------------------------------------------------------
    # Per-user listing pages
    # ------------------------------------------------------------------

    async def get_user_file_list(
        self, user_id: UUID, page: int, sort: SortOrder
    ) -> Optional[dict]:
        if page >= self.max_listing_pages:
            return None
        return await self.get(self.user_files_key(user_id, page, sort))

    async def set_user_file_list(
        self, user_id: UUID, page: int, sort: SortOrder, listing: dict
    ) -> None:
        # Pages past the bound are never cached, so invalidation can enumerate them all
        if page >= self.max_listing_pages:
            return
        await self.set(self.user_files_key(user_id, page, sort), listing, self.file_list_ttl)

    async def delete_user_file_lists(self, user_id: UUID) -> int:
        return await self.delete_by_prefix(f"{USER_FILES_PREFIX}:{user_id}:*")

    # ------------------------------------------------------------------
    # Annotation snapshot
    # ------------------------------------------------------------------

    async def get_file_annotations(self, document_id: UUID) -> Optional[dict]:
        return await self.get(self.file_annotations_key(document_id))

    async def set_file_annotations(self, document_id: UUID, snapshot: dict) -> None:
        await self.set(self.file_annotations_key(document_id), snapshot, self.annotations_ttl)

    async def delete_file_annotations(self, document_id: UUID) -> None:
        await self.delete(self.file_annotations_key(document_id))

    # ------------------------------------------------------------------
    # Invalidation policy
    # ------------------------------------------------------------------

    async def invalidate_document(self, document_id: UUID) -> None:
        """Drop every document-scoped entry: metadata, user list, annotations"""
        logger.info(f"Invalidating document cache: {document_id}")
        await self.delete_file_info(document_id)
        await self.delete_file_users(document_id)
        await self.delete_file_annotations(document_id)

    async def invalidate_user(self, user_id: UUID) -> None:
        """Drop every listing page of a user"""
        logger.info(f"Invalidating listing cache for user: {user_id}")
        await self.delete_user_file_lists(user_id)

    async def invalidate_access(
        self,
        document_id: UUID,
        emails: Iterable[str] = (),
        user_ids: Iterable[UUID] = (),
    ) -> None:
        """
        Drop everything a membership change on a document could have staled.

        Args:
            document_id: Document whose membership changed
            emails: Emails whose (document, email) role entry must go
            user_ids: Known users whose listing pages must go
        """
        await self.delete_file_users(document_id)
        await self.delete_file_info(document_id)
        for email in set(emails):
            await self.delete_user_role(document_id, email)
        for user_id in set(user_ids):
            await self.delete_user_file_lists(user_id)
