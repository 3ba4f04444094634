# app/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product listed by a store. Sellable details live on its variants.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=200, index=True)

    description: str

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique, generated from name)",
    )

    brand: str = Field(max_length=100)

    store_id: uuid.UUID = Field(foreign_key="stores.id", index=True)

    category_id: uuid.UUID = Field(foreign_key="categories.id", index=True)

    subcategory_id: uuid.UUID = Field(foreign_key="subcategories.id", index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class ProductVariant(SQLModel, table=True):
    """
    One sellable variation of a product (e.g. a color/material line).
    """

    __tablename__ = "product_variants"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    product_id: uuid.UUID = Field(foreign_key="products.id", index=True)

    variant_name: str = Field(max_length=200)

    variant_description: str = Field(default="")

    variant_image: str = Field(default="", description="Thumbnail URL")

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique, generated from variant_name)",
    )

    is_sale: bool = Field(default=False)

    sale_end_date: str | None = Field(default=None)

    sku: str = Field(max_length=100)

    keywords: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class ProductVariantImage(SQLModel, table=True):
    __tablename__ = "product_variant_images"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    variant_id: uuid.UUID = Field(foreign_key="product_variants.id", index=True)

    url: str

    sort_order: int = Field(default=0, ge=0)


class Color(SQLModel, table=True):
    __tablename__ = "colors"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    variant_id: uuid.UUID = Field(foreign_key="product_variants.id", index=True)

    name: str


class Size(SQLModel, table=True):
    __tablename__ = "sizes"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    variant_id: uuid.UUID = Field(foreign_key="product_variants.id", index=True)

    size: str

    quantity: int = Field(ge=0)

    price: float = Field(gt=0)

    discount: float = Field(default=0, ge=0)
