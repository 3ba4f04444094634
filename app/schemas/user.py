# app/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

# App-level roles. "guest" = no token, so we don't store it here.
Role = Literal["user", "admin", "seller"]


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: str
    name: str
    email: str
    picture: str
    role: Role
    created_at: datetime
    updated_at: datetime


class UserRoleUpdate(SQLModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role


# ----- Identity provider webhook -----


class WebhookEmailAddress(SQLModel):
    model_config = ConfigDict(extra="ignore")

    email_address: str


class WebhookUserData(SQLModel):
    """
    User object sent by the identity provider.

    Only the fields we mirror are declared; everything else is ignored.
    `user.deleted` events carry little more than `id`.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    image_url: str | None = None
    email_addresses: list[WebhookEmailAddress] = []


class WebhookEvent(SQLModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    data: WebhookUserData
