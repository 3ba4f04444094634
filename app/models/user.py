# app/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Local mirror of an identity-provider user.

    Identity:
      - id: the provider's user id (opaque string, also the JWT "sub")

    Role:
      - "user" | "admin" | "seller"
      - "guest" is represented by the absence of a row / missing token.

    Rows are written by the identity webhook; passwords never live here.
    """

    __tablename__ = "users"

    id: str = Field(
        primary_key=True,
        index=True,
        description="Identity provider user id",
    )

    name: str = Field(
        max_length=100,
        description="Full name, falls back to username",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Primary email address from the identity provider",
    )

    picture: str = Field(
        default="",
        description="Avatar URL",
    )

    # Application role (controls dashboard access)
    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin | seller",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )
