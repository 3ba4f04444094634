# app/models/store.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Store(SQLModel, table=True):
    """
    A seller's storefront.

    Unique fields (checked in this order): name, email, phone, url

    Status:
      - "PENDING" on creation; only admins move it to
        "ACTIVE" | "BANNED" | "DISABLED".
    """

    __tablename__ = "stores"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=50, unique=True, index=True)

    description: str = Field(max_length=500)

    email: str = Field(unique=True, index=True)

    phone: str = Field(unique=True, index=True)

    url: str = Field(
        max_length=50,
        unique=True,
        index=True,
        description="URL-friendly identifier of the store",
    )

    logo: str = Field(description="Logo image URL")

    cover: str = Field(description="Cover image URL")

    featured: bool = Field(default=False)

    status: str = Field(
        default="PENDING",
        index=True,
        description="PENDING | ACTIVE | BANNED | DISABLED",
    )

    user_id: str = Field(
        foreign_key="users.id",
        index=True,
        description="Owner (seller) of the store",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
