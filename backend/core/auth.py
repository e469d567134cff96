"""Authentication types and utilities."""

from dataclasses import dataclass

from litestar import Request

from core.errors import AuthError


@dataclass(frozen=True)
class AuthenticatedUser:
    """Represents an authenticated user in the request scope."""

    username: str
    name: str
    token: str


async def provide_current_user(request: Request) -> AuthenticatedUser:
    """Dependency provider that returns the authenticated user from the request scope."""
    user = request.scope.get("user")
    if not user:
        raise AuthError("Unauthorized")
    return user
