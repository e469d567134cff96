"""User registration, login, profile update and logout."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from core.auth import AuthenticatedUser
from core.errors import AuthError, NotFoundError, ValidationError
from core.password import hash_password, needs_rehash, verify_password
from core.responses import LoginResponse, UserResponse, to_user_response
from core.store import Store
from core.validation import (
    LoginUserRequest,
    RegisterUserRequest,
    UpdateUserRequest,
    validate,
)


logger = logging.getLogger(__name__)

BAD_CREDENTIALS = "Username or password is wrong"


async def register(store: Store, payload: Any) -> UserResponse:
    """Create a user; the username must not be taken."""
    request = validate(RegisterUserRequest, payload)

    if await store.find_user(request.username):
        raise ValidationError("Username already exists")

    row = await store.insert_user(
        request.username, request.name, hash_password(request.password)
    )
    logger.info("Registered user %s", request.username)
    return to_user_response(row)


async def login(store: Store, payload: Any, expire_minutes: int) -> LoginResponse:
    """Check credentials and issue a new session token.

    Unknown usernames and wrong passwords fail identically.
    """
    request = validate(LoginUserRequest, payload)

    user = await store.find_user(request.username)
    if not user or not verify_password(request.password, user["pwhash"]):
        logger.info("Failed login for %s", request.username)
        raise AuthError(BAD_CREDENTIALS)

    if needs_rehash(user["pwhash"]):
        await store.update_user(
            request.username, {"pwhash": hash_password(request.password)}
        )
        logger.info("Rehashed password for %s", request.username)

    token = str(uuid4())
    now = datetime.now(timezone.utc)
    await store.insert_session(
        token, user["username"], now, now + timedelta(minutes=expire_minutes)
    )
    logger.info("User %s logged in", user["username"])

    return LoginResponse(username=user["username"], name=user["name"], token=token)


def get(user: AuthenticatedUser) -> UserResponse:
    return UserResponse(username=user.username, name=user.name)


async def update(store: Store, user: AuthenticatedUser, payload: Any) -> UserResponse:
    """Patch name and/or password; omitted fields keep their value."""
    request = validate(UpdateUserRequest, payload)

    fields: dict[str, Any] = {}
    if request.name is not None:
        fields["name"] = request.name
    if request.password is not None:
        fields["pwhash"] = hash_password(request.password)

    if not fields:
        return get(user)

    row = await store.update_user(user.username, fields)
    if not row:
        raise NotFoundError("User is not found")
    return to_user_response(row)


async def logout(store: Store, user: AuthenticatedUser) -> bool:
    """Revoke the session the request was made with."""
    await store.delete_session(user.token)
    logger.info("User %s logged out", user.username)
    return True
