from typing import Any

from litestar import Controller, delete, get, post, put

from core.auth import AuthenticatedUser
from core.guards import require_session
from core.responses import DataResponse
from core.store import Store
import services.addresses as address_service


class AddressesController(Controller):
    path = "/api/contacts/{contact_id:int}/addresses"
    tags = ["addresses"]
    guards = [require_session]

    @get()
    async def list_addresses(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
    ) -> DataResponse:
        """List all addresses of a contact."""
        return DataResponse(data=await address_service.list_all(store, current_user, contact_id))

    @post(status_code=200)
    async def create_address(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
        data: Any,
    ) -> DataResponse:
        """Add an address to a contact."""
        response = await address_service.create(store, current_user, contact_id, data)
        return DataResponse(data=response)

    @get("/{address_id:int}")
    async def get_address(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
        address_id: int,
    ) -> DataResponse:
        """Get a single address."""
        response = await address_service.get(store, current_user, contact_id, address_id)
        return DataResponse(data=response)

    @put("/{address_id:int}")
    async def update_address(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
        address_id: int,
        data: Any,
    ) -> DataResponse:
        """Replace an address's fields."""
        response = await address_service.update(
            store, current_user, contact_id, address_id, data
        )
        return DataResponse(data=response)

    @delete("/{address_id:int}", status_code=200)
    async def delete_address(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
        address_id: int,
    ) -> DataResponse:
        """Delete an address."""
        response = await address_service.remove(store, current_user, contact_id, address_id)
        return DataResponse(data=response)
