"""Addresses of a contact. The contact must belong to the calling user."""

from typing import Any

from core.auth import AuthenticatedUser
from core.errors import NotFoundError
from core.responses import AddressResponse, to_address_response
from core.store import Store
from core.validation import AddressRequest, validate
from services.contacts import get_owned


ADDRESS_NOT_FOUND = "Address is not found"


async def create(
    store: Store, user: AuthenticatedUser, contact_id: int, payload: Any
) -> AddressResponse:
    request = validate(AddressRequest, payload)
    await get_owned(store, user, contact_id)
    row = await store.insert_address(contact_id, request.model_dump())
    return to_address_response(row)


async def get(
    store: Store, user: AuthenticatedUser, contact_id: int, address_id: int
) -> AddressResponse:
    await get_owned(store, user, contact_id)
    row = await store.find_address(contact_id, address_id)
    if not row:
        raise NotFoundError(ADDRESS_NOT_FOUND)
    return to_address_response(row)


async def update(
    store: Store, user: AuthenticatedUser, contact_id: int, address_id: int, payload: Any
) -> AddressResponse:
    request = validate(AddressRequest, payload)
    await get_owned(store, user, contact_id)
    row = await store.update_address(contact_id, address_id, request.model_dump())
    if not row:
        raise NotFoundError(ADDRESS_NOT_FOUND)
    return to_address_response(row)


async def remove(
    store: Store, user: AuthenticatedUser, contact_id: int, address_id: int
) -> bool:
    await get_owned(store, user, contact_id)
    if not await store.delete_address(contact_id, address_id):
        raise NotFoundError(ADDRESS_NOT_FOUND)
    return True


async def list_all(
    store: Store, user: AuthenticatedUser, contact_id: int
) -> list[AddressResponse]:
    await get_owned(store, user, contact_id)
    return [to_address_response(row) for row in await store.list_addresses(contact_id)]
