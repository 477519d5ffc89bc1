from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.emails import normalize_email
from src.domain.entities import Identity

from .dtos import CountDocumentsResponse


class CountDocumentsUseCase:
    """Total number of documents the caller owns, views or edits"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Identity) -> Result[CountDocumentsResponse]:
        async with self.uow:
            total = await self.uow.documents.count_accessible(normalize_email(caller.email))
            return Return.ok(CountDocumentsResponse(total=total))
