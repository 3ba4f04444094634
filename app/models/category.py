# app/models/category.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Top-level catalog category, managed by admins.

    Unique fields (checked in this order): name, url
    """

    __tablename__ = "categories"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=50,
        unique=True,
        index=True,
    )

    image: str = Field(description="Image URL")

    url: str = Field(
        max_length=50,
        unique=True,
        index=True,
        description="URL-friendly identifier used in storefront routes",
    )

    featured: bool = Field(default=False, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class SubCategory(SQLModel, table=True):
    """
    Second-level category. Always points at exactly one Category.

    Unique fields (checked in this order): name, url
    """

    __tablename__ = "subcategories"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=50,
        unique=True,
        index=True,
    )

    image: str = Field(description="Image URL")

    url: str = Field(
        max_length=50,
        unique=True,
        index=True,
    )

    featured: bool = Field(default=False, index=True)

    category_id: uuid.UUID = Field(
        foreign_key="categories.id",
        index=True,
        description="FK to categories.id",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
