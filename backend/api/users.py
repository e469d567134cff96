from typing import Any

from litestar import Controller, delete, get, patch, post
from litestar.datastructures import State

from core.auth import AuthenticatedUser
from core.guards import require_session
from core.responses import DataResponse
from core.store import Store
import services.users as user_service


class UsersController(Controller):
    path = "/api/users"
    tags = ["users"]

    @post(status_code=200)
    async def register(self, store: Store, data: Any) -> DataResponse:
        """Register a new user."""
        return DataResponse(data=await user_service.register(store, data))

    @post("/login", status_code=200)
    async def login(self, store: Store, state: State, data: Any) -> DataResponse:
        """Authenticate and issue a session token."""
        response = await user_service.login(
            store, data, expire_minutes=state.config.session.expire_minutes
        )
        return DataResponse(data=response)

    @get("/current", guards=[require_session])
    async def get_current(self, current_user: AuthenticatedUser) -> DataResponse:
        """Get the authenticated user."""
        return DataResponse(data=user_service.get(current_user))

    @patch("/current", guards=[require_session])
    async def update_current(
        self,
        store: Store,
        current_user: AuthenticatedUser,
        data: Any,
    ) -> DataResponse:
        """Update name and/or password of the authenticated user."""
        return DataResponse(data=await user_service.update(store, current_user, data))

    @delete("/current", status_code=200, guards=[require_session])
    async def logout(
        self,
        store: Store,
        current_user: AuthenticatedUser,
    ) -> DataResponse:
        """Revoke the session token used for this request."""
        return DataResponse(data=await user_service.logout(store, current_user))
