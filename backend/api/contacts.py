from typing import Any

from litestar import Controller, delete, get, post, put
from litestar.params import Parameter

from core.auth import AuthenticatedUser
from core.guards import require_session
from core.responses import DataResponse, PagedResponse
from core.store import Store
import services.contacts as contact_service


class ContactsController(Controller):
    path = "/api/contacts"
    tags = ["contacts"]
    guards = [require_session]

    @get()
    async def search_contacts(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        name: str | None = Parameter(default=None, description="First or last name contains"),
        email: str | None = Parameter(default=None, description="Email contains"),
        phone: str | None = Parameter(default=None, description="Phone contains"),
        page: int = Parameter(default=1, description="1-based page number"),
        size: int = Parameter(default=10, description="Page size"),
    ) -> PagedResponse:
        """Search the user's contacts with paging."""
        query = {"name": name, "email": email, "phone": phone, "page": page, "size": size}
        return await contact_service.search(store, current_user, query)

    @post(status_code=200)
    async def create_contact(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        data: Any,
    ) -> DataResponse:
        """Create a contact owned by the user."""
        return DataResponse(data=await contact_service.create(store, current_user, data))

    @get("/{contact_id:int}")
    async def get_contact(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
    ) -> DataResponse:
        """Get a single contact."""
        return DataResponse(data=await contact_service.get(store, current_user, contact_id))

    @put("/{contact_id:int}")
    async def update_contact(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
        data: Any,
    ) -> DataResponse:
        """Replace a contact's fields."""
        response = await contact_service.update(store, current_user, contact_id, data)
        return DataResponse(data=response)

    @delete("/{contact_id:int}", status_code=200)
    async def delete_contact(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        contact_id: int,
    ) -> DataResponse:
        """Delete a contact."""
        return DataResponse(data=await contact_service.remove(store, current_user, contact_id))
