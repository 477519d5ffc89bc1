from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import DOCUMENT_NOT_FOUND, iso, load_document_access
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import AnnotationSnapshotResponse

INSUFFICIENT_ROLE = Error(
    "INSUFFICIENT_ROLE", "Only the owner and editors can access annotations"
)


class ReadAnnotationsUseCase:
    """
    Use case for reading the annotation snapshot of a document.

    Business Rules:
    - Requires owner or editor, checked before the cache is consulted
    - The snapshot is created lazily (version 0, empty payload) on first read
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self, document_id: UUID, caller: Identity
    ) -> Result[AnnotationSnapshotResponse]:
        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            _, access = loaded

            if not resolve_role(access, caller.email).at_least(DocumentRole.editor):
                return Return.err(INSUFFICIENT_ROLE)

            cached = await self.cache.get_file_annotations(document_id)
            if cached is not None:
                return Return.ok(AnnotationSnapshotResponse.model_validate(cached))

            snapshot = await self.uow.annotations.get_or_create(document_id)
            await self.uow.commit()

            response = AnnotationSnapshotResponse(
                document_id=str(document_id),
                payload=snapshot.payload,
                version=snapshot.version,
                updated_at=iso(snapshot.updated_at),
            )

        await self.cache.set_file_annotations(document_id, response.model_dump(mode="json"))
        return Return.ok(response)
