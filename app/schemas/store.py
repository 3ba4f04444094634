# app/schemas/store.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel, Field

from app.schemas.validators import PHONE_RE, STORE_NAME_RE, URL_RE, check_pattern

StoreStatus = Literal["PENDING", "ACTIVE", "BANNED", "DISABLED"]

# Path segments under /stores that are routes, not store urls
RESERVED_STORE_URLS = frozenset({"mine"})


class StoreUpsert(SQLModel):
    """
    Payload for creating or updating a store (seller only).

    Only fields the seller controls; owner, status and timestamps
    are managed by the backend.
    """

    model_config = ConfigDict(extra="forbid")

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(min_length=2, max_length=50)
    description: str = Field(min_length=30, max_length=500)
    email: EmailStr
    phone: str
    logo: str = Field(min_length=1)
    cover: str = Field(min_length=1)
    url: str = Field(min_length=2, max_length=50)
    featured: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_pattern(
            v,
            STORE_NAME_RE,
            "Only letters, numbers, space, hyphen, and underscore are allowed in "
            "the store name, and consecutive occurrences of hyphens, underscores, "
            "or spaces are not permitted.",
        )

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return check_pattern(v, PHONE_RE, "Invalid phone number format.")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if v.lower() in RESERVED_STORE_URLS:
            raise ValueError(f"The store url \"{v}\" is reserved.")
        return check_pattern(
            v,
            URL_RE,
            "Only letters, numbers, hyphen, and underscore are allowed in the "
            "store url, and consecutive occurrences of hyphens, underscores, or "
            "spaces are not permitted.",
        )


class StoreRead(SQLModel):
    """Store representation for clients."""

    id: uuid.UUID
    name: str
    description: str
    email: str
    phone: str
    logo: str
    cover: str
    url: str
    featured: bool
    status: StoreStatus
    user_id: str
    created_at: datetime
    updated_at: datetime


class StoreStatusUpdate(SQLModel):
    """
    Admin-only status change.
    """

    model_config = ConfigDict(extra="forbid")
    status: StoreStatus
