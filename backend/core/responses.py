import math
from dataclasses import dataclass
from typing import Any


@dataclass
class DataResponse:
    """Success envelope: ``{"data": ...}``."""

    data: Any


@dataclass
class Paging:
    current_page: int
    size: int
    total_page: int

    @classmethod
    def of(cls, page: int, size: int, total: int) -> "Paging":
        """Paging metadata for a page of a result set with `total` rows."""
        return cls(current_page=page, size=size, total_page=math.ceil(total / size))


@dataclass
class PagedResponse:
    """Success envelope for list endpoints: ``{"data": [...], "paging": {...}}``."""

    data: list[Any]
    paging: Paging


@dataclass
class UserResponse:
    username: str
    name: str


@dataclass
class LoginResponse:
    username: str
    name: str
    token: str


@dataclass
class ContactResponse:
    id: int
    first_name: str
    last_name: str | None
    email: str | None
    phone: str | None


@dataclass
class AddressResponse:
    id: int
    street: str | None
    city: str | None
    province: str | None
    country: str
    postal_code: str


def to_user_response(row: dict[str, Any]) -> UserResponse:
    return UserResponse(username=row["username"], name=row["name"])


def to_contact_response(row: dict[str, Any]) -> ContactResponse:
    return ContactResponse(
        id=row["id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone=row["phone"],
    )


def to_address_response(row: dict[str, Any]) -> AddressResponse:
    return AddressResponse(
        id=row["id"],
        street=row["street"],
        city=row["city"],
        province=row["province"],
        country=row["country"],
        postal_code=row["postal_code"],
    )
