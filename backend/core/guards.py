from litestar.connection import ASGIConnection
from litestar.handlers import BaseRouteHandler

from core.errors import AuthError


async def require_session(connection: ASGIConnection, _: BaseRouteHandler) -> None:
    """Guard that rejects requests without a valid session token.

    Usage:
        class ContactsController(Controller):
            guards = [require_session]
    """
    if not connection.scope.get("user"):
        raise AuthError("Unauthorized")
