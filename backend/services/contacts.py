"""Contact CRUD and search, always scoped to the calling user."""

from typing import Any

from core.auth import AuthenticatedUser
from core.errors import NotFoundError
from core.responses import ContactResponse, PagedResponse, Paging, to_contact_response
from core.store import ContactFilters, Store
from core.validation import ContactRequest, SearchContactRequest, validate


CONTACT_NOT_FOUND = "Contact is not found"


async def get_owned(store: Store, user: AuthenticatedUser, contact_id: int) -> dict[str, Any]:
    """Fetch a contact row owned by the user, or raise NotFoundError.

    Missing and foreign contacts are indistinguishable to the caller.
    """
    row = await store.find_contact(user.username, contact_id)
    if not row:
        raise NotFoundError(CONTACT_NOT_FOUND)
    return row


async def create(store: Store, user: AuthenticatedUser, payload: Any) -> ContactResponse:
    request = validate(ContactRequest, payload)
    row = await store.insert_contact(user.username, request.model_dump())
    return to_contact_response(row)


async def get(store: Store, user: AuthenticatedUser, contact_id: int) -> ContactResponse:
    return to_contact_response(await get_owned(store, user, contact_id))


async def update(
    store: Store, user: AuthenticatedUser, contact_id: int, payload: Any
) -> ContactResponse:
    """Replace the contact's fields; absent optional fields become null."""
    request = validate(ContactRequest, payload)
    row = await store.update_contact(user.username, contact_id, request.model_dump())
    if not row:
        raise NotFoundError(CONTACT_NOT_FOUND)
    return to_contact_response(row)


async def remove(store: Store, user: AuthenticatedUser, contact_id: int) -> bool:
    if not await store.delete_contact(user.username, contact_id):
        raise NotFoundError(CONTACT_NOT_FOUND)
    return True


async def search(store: Store, user: AuthenticatedUser, payload: Any) -> PagedResponse:
    """Page through the user's contacts matching the optional filters.

    total_page always reflects the full match count, also for pages past
    the end. Pages past the end are answered without a page query; the
    offset never reaches the database there.
    """
    request = validate(SearchContactRequest, payload)
    filters = ContactFilters(name=request.name, email=request.email, phone=request.phone)

    total = await store.count_contacts(user.username, filters)
    offset = (request.page - 1) * request.size
    rows = []
    if offset < total:
        rows = await store.search_contacts(
            user.username, filters, limit=request.size, offset=offset
        )

    return PagedResponse(
        data=[to_contact_response(row) for row in rows],
        paging=Paging.of(request.page, request.size, total),
    )
