"""
Write Annotations Use Case

Optimistic-concurrency write of the annotation snapshot.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import DOCUMENT_NOT_FOUND, load_document_access
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import WriteAnnotationsResponse
from .read_annotations_use_case import INSUFFICIENT_ROLE

logger = logging.getLogger(__name__)


class WriteAnnotationsUseCase:
    """
    Use case for replacing the annotation payload.

    Business Rules:
    - Requires owner or editor
    - The write applies only if the stored version equals expected_version,
      and then increments the version by exactly one
    - A stale expected_version is a VERSION_CONFLICT carrying the current
      version; the payload is never merged
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self, document_id: UUID, caller: Identity, payload: str, expected_version: int
    ) -> Result[WriteAnnotationsResponse]:
        if expected_version < 0:
            return Return.err(Error("INVALID_VERSION", "Version must be zero or greater"))

        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            _, access = loaded

            if not resolve_role(access, caller.email).at_least(DocumentRole.editor):
                return Return.err(INSUFFICIENT_ROLE)

            await self.uow.annotations.get_or_create(document_id)
            applied = await self.uow.annotations.compare_and_swap(
                document_id, expected_version, payload
            )
            if not applied:
                current = await self.uow.annotations.get_by_document(document_id)
                current_version = current.version if current else 0
                logger.info(
                    f"Annotation conflict on document {document_id}: "
                    f"expected {expected_version}, current {current_version}"
                )
                return Return.err(
                    Error(
                        "VERSION_CONFLICT",
                        f"Annotations were modified concurrently (current version {current_version})",
                        {"current_version": current_version},
                    )
                )
            await self.uow.commit()

        new_version = expected_version + 1
        logger.info(f"Annotations of document {document_id} saved at version {new_version}")

        await self.cache.delete_file_annotations(document_id)
        await self.cache.delete_file_info(document_id)
        return Return.ok(WriteAnnotationsResponse(document_id=str(document_id), version=new_version))
