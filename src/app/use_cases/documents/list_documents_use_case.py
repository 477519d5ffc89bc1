"""
List Documents Use Case

Paged listing of every document the caller owns, views or edits.
"""

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import UNREGISTERED_USER_NAME, iso
from src.domain.access import DocumentAccess, resolve_role
from src.domain.emails import normalize_email
from src.domain.entities import Identity, SortOrder

from .dtos import DocumentListItem, ListDocumentsResponse


class ListDocumentsUseCase:
    """
    Use case for listing accessible documents.

    Business Rules:
    - Pages are zero based, per_page documents each
    - Sorted by updated_at, ASC or DESC
    - Each item carries the caller's resolved role and the owner's name
    - Pages are cached per (user, page, sort) up to the cache page bound
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache, per_page: int = 10):
        self.uow = uow
        self.cache = cache
        self.per_page = per_page

    async def execute(
        self, caller: Identity, page: int = 0, sort: str = SortOrder.desc.value
    ) -> Result[ListDocumentsResponse]:
        if page < 0:
            return Return.err(Error("INVALID_PAGE", "Page must be zero or greater"))
        try:
            sort_order = SortOrder(str(sort).upper())
        except ValueError:
            return Return.err(Error("INVALID_SORT", "Sort must be ASC or DESC"))

        cached = await self.cache.get_user_file_list(caller.id, page, sort_order)
        if cached is not None:
            return Return.ok(ListDocumentsResponse.model_validate(cached))

        email = normalize_email(caller.email)
        async with self.uow:
            rows = await self.uow.documents.list_accessible(
                email,
                offset=page * self.per_page,
                limit=self.per_page,
                descending=sort_order == SortOrder.desc,
            )
            owners = await self.uow.users.get_by_emails(
                list({document.owner_email for document, _ in rows})
            )

            items = []
            for document, member_role in rows:
                # The query already matched this email, one member row is enough to resolve
                access = DocumentAccess.for_member(document, email, member_role)
                owner = owners.get(document.owner_email)
                items.append(
                    DocumentListItem(
                        id=str(document.id),
                        name=document.name,
                        owner=owner.name if owner else UNREGISTERED_USER_NAME,
                        owner_email=document.owner_email,
                        role=resolve_role(access, email).value,
                        updated_at=iso(document.updated_at),
                    )
                )

        response = ListDocumentsResponse(
            items=items, page=page, per_page=self.per_page, sort=sort_order.value
        )
        await self.cache.set_user_file_list(
            caller.id, page, sort_order, response.model_dump(mode="json")
        )
        return Return.ok(response)
