"""Declarative request rules and the function that applies them.

Each request type is a pydantic model whose fields carry the rules
(required/optional, length bounds, formats). ``validate`` turns a raw payload
into an instance of that model or raises ``ValidationError`` naming every
violated field.
"""

from typing import Annotated, Any, ClassVar, TypeVar

import email_validator
import pydantic
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from core.errors import ValidationError


M = TypeVar("M", bound=BaseModel)

# Field types shared by the rule sets below
RequiredText = Annotated[str, StringConstraints(min_length=1, max_length=100)]
OptionalText = Annotated[str, StringConstraints(max_length=100)]
Phone = Annotated[str, StringConstraints(max_length=20)]
Street = Annotated[str, StringConstraints(max_length=255)]
PostalCode = Annotated[str, StringConstraints(min_length=1, max_length=10)]


class RequestRules(BaseModel):
    """Base for request rule sets.

    Fields named in blank_to_null accept "" and store it as None, so that
    absent and empty are the same.
    """

    model_config = ConfigDict(extra="ignore")

    blank_to_null: ClassVar[tuple[str, ...]] = ()

    @pydantic.model_validator(mode="before")
    @classmethod
    def _blank_to_null(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for name in cls.blank_to_null:
            if cleaned.get(name) == "":
                cleaned[name] = None
        return cleaned


def _describe(error: Any) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "body"
    return f"{location}: {error['msg']}"


def validate(rules: type[M], payload: Any) -> M:
    """Check payload against rules, returning the typed request."""
    if not isinstance(payload, dict):
        raise ValidationError("body: Request body must be a JSON object")
    try:
        return rules.model_validate(payload)
    except pydantic.ValidationError as exc:
        details = [_describe(error) for error in exc.errors()]
        raise ValidationError("; ".join(details), details=details) from None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class RegisterUserRequest(RequestRules):
    username: RequiredText
    password: RequiredText
    name: RequiredText


class LoginUserRequest(RequestRules):
    username: RequiredText
    password: RequiredText


class UpdateUserRequest(RequestRules):
    name: RequiredText | None = None
    password: RequiredText | None = None


# ---------------------------------------------------------------------------
# Contacts
# ---------------------------------------------------------------------------


class ContactRequest(RequestRules):
    """Used for both create and full update."""

    blank_to_null = ("last_name", "email", "phone")

    first_name: RequiredText
    last_name: OptionalText | None = None
    email: OptionalText | None = None
    phone: Phone | None = None

    @pydantic.field_validator("email")
    @classmethod
    def _email_format(cls, value: str | None) -> str | None:
        # Checked only; the address is stored as given
        if value is not None:
            email_validator.validate_email(
                value, check_deliverability=False, test_environment=True
            )
        return value


class SearchContactRequest(RequestRules):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    page: int = Field(default=1, ge=1)
    size: int = Field(default=10, ge=1, le=100)


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


class AddressRequest(RequestRules):
    blank_to_null = ("street", "city", "province")

    street: Street | None = None
    city: OptionalText | None = None
    province: OptionalText | None = None
    country: RequiredText
    postal_code: PostalCode
