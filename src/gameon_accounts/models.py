"""
Pydantic models for the account service wire format.

The account service speaks CouchDB-flavoured JSON: identifiers travel as
``_id`` and ``_rev`` and attribute names are camelCase. Each model keeps
snake_case attribute names in Python and carries the exact wire name as a
field alias, so ``model_validate`` accepts server JSON and
``to_payload()`` produces it.

Decoding is lenient in the same way the service's own clients are:
missing fields and JSON nulls fall back to empty values and unknown fields
are ignored. A value of the wrong JSON type is still a validation error.
Server JSON is matched on wire names only; the Python attribute names are
accepted when building models in code.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, field_validator


def _null_as_empty(value: Any) -> Any:
    return "" if value is None else value


# A string field that decodes JSON null as ""
WireStr = Annotated[str, BeforeValidator(_null_as_empty)]

# ============================================================================
# EMBEDDED OBJECTS
# ============================================================================


class Location(BaseModel):
    """
    Where the player currently is.

    Attributes:
        location: Opaque room/site identifier.
    """

    location: WireStr = ""


class Credentials(BaseModel):
    """
    Secrets stored alongside an account.

    Attributes:
        shared_secret: Opaque credential string (``sharedSecret`` on the wire).
    """

    model_config = ConfigDict(populate_by_name=True)

    shared_secret: WireStr = Field(default="", alias="sharedSecret")


# ============================================================================
# ACCOUNT MODELS
# ============================================================================


class AccountCreateRequest(BaseModel):
    """
    Fields a caller supplies when creating an account.

    ``id`` and ``revision`` are server-assigned. They are normally left
    empty on creation and must be passed through unchanged when known.

    Attributes:
        id: Account identifier (``_id``).
        revision: Optimistic-concurrency token (``_rev``); omitted from the
                  payload when empty.
        name: Display name.
        favorite_color: Arbitrary attribute (``favoriteColor``).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: WireStr = Field(default="", alias="_id")
    revision: WireStr = Field(default="", alias="_rev")
    name: WireStr = ""
    favorite_color: WireStr = Field(default="", alias="favoriteColor")

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready dict using wire names."""
        payload = self.model_dump(by_alias=True)
        if not self.revision:
            del payload["_rev"]
        return payload


class AccountRecord(AccountCreateRequest):
    """
    A player account as returned by the service.

    Attributes:
        location: Embedded ``{"location": ...}`` object.
        credentials: Embedded ``{"sharedSecret": ...}`` object.
    """

    location: Location = Field(default_factory=Location)
    credentials: Credentials = Field(default_factory=Credentials)

    @field_validator("location", "credentials", mode="before")
    @classmethod
    def _null_object_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


# Adapters for decoding raw response bodies. A JSON null body for the
# collection decodes to no accounts.
ACCOUNT_ADAPTER: TypeAdapter[AccountRecord] = TypeAdapter(AccountRecord)
ACCOUNT_LIST_ADAPTER: TypeAdapter[list[AccountRecord] | None] = TypeAdapter(
    list[AccountRecord] | None
)


def decode_account(raw: bytes | str) -> AccountRecord:
    """Decode one account from a response body."""
    return ACCOUNT_ADAPTER.validate_json(raw, by_alias=True, by_name=False)


def decode_account_list(raw: bytes | str) -> list[AccountRecord] | None:
    """Decode the collection body; a JSON null gives None."""
    return ACCOUNT_LIST_ADAPTER.validate_json(raw, by_alias=True, by_name=False)
