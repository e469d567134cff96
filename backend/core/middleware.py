"""Middleware for session and authentication handling."""

import logging
from datetime import datetime, timezone

from litestar.connection import ASGIConnection
from litestar.middleware import AbstractMiddleware
from litestar.types import Receive, Scope, Send

from core.auth import AuthenticatedUser


logger = logging.getLogger(__name__)


class SessionMiddleware(AbstractMiddleware):
    """Middleware to validate the Authorization token and populate user in scope.

    The header carries the raw token, no scheme prefix. Requests without a
    valid token pass through unauthenticated; protected handlers reject them
    with the require_session guard.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        connection: ASGIConnection = ASGIConnection(scope, receive, send)
        token = connection.headers.get("authorization")

        if token:
            user = await self._validate_session(connection, token)
            if user:
                scope["user"] = user

        await self.app(scope, receive, send)

    async def _validate_session(
        self, connection: ASGIConnection, token: str
    ) -> AuthenticatedUser | None:
        """Validate the token and return its user if the session is live."""
        now = datetime.now(timezone.utc)
        async with connection.app.state.store_factory() as store:
            row = await store.find_session_user(token, now)

        if not row:
            logger.debug("Rejected unknown or expired session token")
            return None

        return AuthenticatedUser(
            username=row["username"],
            name=row["name"],
            token=row["token"],
        )
