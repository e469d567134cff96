"""Storage boundary for the services.

Services talk to a ``Store``; one store is opened per request through the
store factory kept in application state. ``PgStore`` is the PostgreSQL
implementation backed by a pooled psycopg connection. Every contact query is
scoped by owner username and every address query by contact id.
"""

import contextlib
from collections.abc import AsyncGenerator, AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

import psycopg
import psycopg.errors
from litestar.datastructures import State

import core.db as db
from core.errors import ValidationError


@dataclass
class ContactFilters:
    name: str | None = None
    email: str | None = None
    phone: str | None = None


@runtime_checkable
class Store(Protocol):
    async def find_user(self, username: str) -> dict[str, Any] | None: ...

    async def insert_user(self, username: str, name: str, pwhash: str) -> dict[str, Any]: ...

    async def update_user(self, username: str, fields: dict[str, Any]) -> dict[str, Any] | None: ...

    async def insert_session(
        self, token: str, username: str, issued: datetime, expires: datetime
    ) -> None: ...

    async def find_session_user(self, token: str, now: datetime) -> dict[str, Any] | None: ...

    async def delete_session(self, token: str) -> int: ...

    async def insert_contact(self, username: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def find_contact(self, username: str, contact_id: int) -> dict[str, Any] | None: ...

    async def update_contact(
        self, username: str, contact_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None: ...

    async def delete_contact(self, username: str, contact_id: int) -> int: ...

    async def search_contacts(
        self, username: str, filters: ContactFilters, limit: int, offset: int
    ) -> list[dict[str, Any]]: ...

    async def count_contacts(self, username: str, filters: ContactFilters) -> int: ...

    async def insert_address(self, contact_id: int, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def find_address(self, contact_id: int, address_id: int) -> dict[str, Any] | None: ...

    async def update_address(
        self, contact_id: int, address_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None: ...

    async def delete_address(self, contact_id: int, address_id: int) -> int: ...

    async def list_addresses(self, contact_id: int) -> list[dict[str, Any]]: ...


StoreFactory = Callable[[], AbstractAsyncContextManager[Store]]


# ---------------------------------------------------------------------------
# SQL Queries
# ---------------------------------------------------------------------------

CONTACT_COLUMNS = "id, first_name, last_name, email, phone"
ADDRESS_COLUMNS = "id, street, city, province, country, postal_code"


def sql_select_user() -> str:
    """Get a user with its password hash."""
    return "SELECT username, name, pwhash FROM users WHERE username = %(username)s"


def sql_insert_user() -> str:
    """Create a new user."""
    return """
        INSERT INTO users (username, name, pwhash)
        VALUES (%(username)s, %(name)s, %(pwhash)s)
        RETURNING username, name
    """


def sql_update_user(fields: set[str]) -> str:
    """Update user fields dynamically."""
    valid_fields = {"name", "pwhash"}
    updates = [f"{f} = %({f})s" for f in sorted(fields) if f in valid_fields]
    if not updates:
        raise ValueError("No valid fields to update")
    return f"""
        UPDATE users
        SET {", ".join(updates)}
        WHERE username = %(username)s
        RETURNING username, name
    """


def sql_insert_session() -> str:
    """Issue a session token."""
    return """
        INSERT INTO sessions (token, username, issued, expires)
        VALUES (%(token)s, %(username)s, %(issued)s, %(expires)s)
    """


def sql_select_session_user() -> str:
    """Resolve an unexpired session token to its user."""
    return """
        SELECT u.username, u.name, s.token
        FROM sessions s
        JOIN users u ON u.username = s.username
        WHERE s.token = %(token)s AND s.expires > %(now)s
    """


def sql_delete_session() -> str:
    """Revoke a session token."""
    return "DELETE FROM sessions WHERE token = %(token)s"


def sql_insert_contact() -> str:
    """Create a contact for a user."""
    return f"""
        INSERT INTO contacts (username, first_name, last_name, email, phone)
        VALUES (%(username)s, %(first_name)s, %(last_name)s, %(email)s, %(phone)s)
        RETURNING {CONTACT_COLUMNS}
    """


def sql_select_contact() -> str:
    """Get a contact owned by the user."""
    return f"""
        SELECT {CONTACT_COLUMNS}
        FROM contacts
        WHERE id = %(id)s AND username = %(username)s
    """


def sql_update_contact() -> str:
    """Replace all contact fields."""
    return f"""
        UPDATE contacts
        SET
            first_name = %(first_name)s,
            last_name = %(last_name)s,
            email = %(email)s,
            phone = %(phone)s
        WHERE id = %(id)s AND username = %(username)s
        RETURNING {CONTACT_COLUMNS}
    """


def sql_delete_contact() -> str:
    """Delete a contact owned by the user."""
    return "DELETE FROM contacts WHERE id = %(id)s AND username = %(username)s"


def _contact_search_conditions() -> str:
    return """
        username = %(username)s
        AND (
            %(name)s::text IS NULL
            OR first_name ILIKE %(name)s
            OR last_name ILIKE %(name)s
        )
        AND (%(email)s::text IS NULL OR email ILIKE %(email)s)
        AND (%(phone)s::text IS NULL OR phone ILIKE %(phone)s)
    """


def sql_select_contacts_search() -> str:
    """Page of contacts matching the filters."""
    return f"""
        SELECT {CONTACT_COLUMNS}
        FROM contacts
        WHERE {_contact_search_conditions()}
        ORDER BY id
        LIMIT %(limit)s OFFSET %(offset)s
    """


def sql_count_contacts_search() -> str:
    """Number of contacts matching the filters."""
    return f"""
        SELECT count(*) AS total
        FROM contacts
        WHERE {_contact_search_conditions()}
    """


def sql_insert_address() -> str:
    """Create an address for a contact."""
    return f"""
        INSERT INTO addresses (contact_id, street, city, province, country, postal_code)
        VALUES (
            %(contact_id)s, %(street)s, %(city)s, %(province)s,
            %(country)s, %(postal_code)s
        )
        RETURNING {ADDRESS_COLUMNS}
    """


def sql_select_address() -> str:
    """Get one address of a contact."""
    return f"""
        SELECT {ADDRESS_COLUMNS}
        FROM addresses
        WHERE id = %(id)s AND contact_id = %(contact_id)s
    """


def sql_select_addresses() -> str:
    """All addresses of a contact."""
    return f"""
        SELECT {ADDRESS_COLUMNS}
        FROM addresses
        WHERE contact_id = %(contact_id)s
        ORDER BY id
    """


def sql_update_address() -> str:
    """Replace all address fields."""
    return f"""
        UPDATE addresses
        SET
            street = %(street)s,
            city = %(city)s,
            province = %(province)s,
            country = %(country)s,
            postal_code = %(postal_code)s
        WHERE id = %(id)s AND contact_id = %(contact_id)s
        RETURNING {ADDRESS_COLUMNS}
    """


def sql_delete_address() -> str:
    """Delete one address of a contact."""
    return "DELETE FROM addresses WHERE id = %(id)s AND contact_id = %(contact_id)s"


def _returned(row: dict[str, Any] | None, statement: str) -> dict[str, Any]:
    if row is None:
        raise RuntimeError(f"{statement} returned no row")
    return row


def like_pattern(value: str | None) -> str | None:
    """Substring pattern for ILIKE with wildcards in the value escaped."""
    if value is None:
        return None
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


# ---------------------------------------------------------------------------
# PostgreSQL store
# ---------------------------------------------------------------------------


class PgStore:
    """Store running on one psycopg connection."""

    def __init__(self, conn: psycopg.AsyncConnection) -> None:
        self.conn = conn

    async def find_user(self, username: str) -> dict[str, Any] | None:
        return await db.fetch_one(self.conn, sql_select_user(), {"username": username})

    async def insert_user(self, username: str, name: str, pwhash: str) -> dict[str, Any]:
        try:
            row = await db.fetch_one(
                self.conn,
                sql_insert_user(),
                {"username": username, "name": name, "pwhash": pwhash},
            )
        except psycopg.errors.UniqueViolation:
            raise ValidationError("Username already exists") from None
        return _returned(row, "INSERT INTO users")

    async def update_user(self, username: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        return await db.fetch_one(
            self.conn,
            sql_update_user(set(fields)),
            {**fields, "username": username},
        )

    async def insert_session(
        self, token: str, username: str, issued: datetime, expires: datetime
    ) -> None:
        await db.execute(
            self.conn,
            sql_insert_session(),
            {"token": token, "username": username, "issued": issued, "expires": expires},
        )

    async def find_session_user(self, token: str, now: datetime) -> dict[str, Any] | None:
        return await db.fetch_one(
            self.conn, sql_select_session_user(), {"token": token, "now": now}
        )

    async def delete_session(self, token: str) -> int:
        return await db.execute(self.conn, sql_delete_session(), {"token": token})

    async def insert_contact(self, username: str, fields: dict[str, Any]) -> dict[str, Any]:
        row = await db.fetch_one(
            self.conn, sql_insert_contact(), {**fields, "username": username}
        )
        return _returned(row, "INSERT INTO contacts")

    async def find_contact(self, username: str, contact_id: int) -> dict[str, Any] | None:
        return await db.fetch_one(
            self.conn, sql_select_contact(), {"id": contact_id, "username": username}
        )

    async def update_contact(
        self, username: str, contact_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        return await db.fetch_one(
            self.conn,
            sql_update_contact(),
            {**fields, "id": contact_id, "username": username},
        )

    async def delete_contact(self, username: str, contact_id: int) -> int:
        return await db.execute(
            self.conn, sql_delete_contact(), {"id": contact_id, "username": username}
        )

    def _search_params(self, username: str, filters: ContactFilters) -> dict[str, Any]:
        return {
            "username": username,
            "name": like_pattern(filters.name),
            "email": like_pattern(filters.email),
            "phone": like_pattern(filters.phone),
        }

    async def search_contacts(
        self, username: str, filters: ContactFilters, limit: int, offset: int
    ) -> list[dict[str, Any]]:
        params = self._search_params(username, filters)
        params.update(limit=limit, offset=offset)
        return await db.fetch_all(self.conn, sql_select_contacts_search(), params)

    async def count_contacts(self, username: str, filters: ContactFilters) -> int:
        row = await db.fetch_one(
            self.conn, sql_count_contacts_search(), self._search_params(username, filters)
        )
        return row["total"] if row else 0

    async def insert_address(self, contact_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        row = await db.fetch_one(
            self.conn, sql_insert_address(), {**fields, "contact_id": contact_id}
        )
        return _returned(row, "INSERT INTO addresses")

    async def find_address(self, contact_id: int, address_id: int) -> dict[str, Any] | None:
        return await db.fetch_one(
            self.conn, sql_select_address(), {"id": address_id, "contact_id": contact_id}
        )

    async def update_address(
        self, contact_id: int, address_id: int, fields: dict[str, Any]
    ) -> dict[str, Any] | None:
        return await db.fetch_one(
            self.conn,
            sql_update_address(),
            {**fields, "id": address_id, "contact_id": contact_id},
        )

    async def delete_address(self, contact_id: int, address_id: int) -> int:
        return await db.execute(
            self.conn, sql_delete_address(), {"id": address_id, "contact_id": contact_id}
        )

    async def list_addresses(self, contact_id: int) -> list[dict[str, Any]]:
        return await db.fetch_all(self.conn, sql_select_addresses(), {"contact_id": contact_id})


@contextlib.asynccontextmanager
async def pg_store() -> AsyncIterator[Store]:
    """Open a PgStore on a pooled connection; commits on success."""
    if not db.pool:
        raise RuntimeError("Database pool not initialized")
    async with db.pool.connection() as conn:
        yield PgStore(conn)


async def provide_store(state: State) -> AsyncGenerator[Store, None]:
    """Litestar dependency provider for the request's store."""
    async with state.store_factory() as store:
        yield store
