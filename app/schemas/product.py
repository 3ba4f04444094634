# app/schemas/product.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class SizeIn(SQLModel):
    model_config = ConfigDict(extra="forbid")

    size: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    price: float = Field(gt=0)
    discount: float = Field(default=0, ge=0, le=100)


class ProductUpsert(SQLModel):
    """
    Payload for creating or updating a product together with one variant.

    - product_id / variant_id are optional: fresh UUIDs are assigned when
      omitted. An existing product_id with a new variant_id adds a variant.
    - Slugs are never client-controlled; they are generated from
      `name` and `variant_name` on creation.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    variant_id: uuid.UUID = Field(default_factory=uuid.uuid4)

    name: str = Field(min_length=2, max_length=200)
    description: str = Field(min_length=1)
    brand: str = Field(min_length=1, max_length=100)
    category_id: uuid.UUID
    subcategory_id: uuid.UUID

    variant_name: str = Field(min_length=2, max_length=200)
    variant_description: str = ""
    variant_image: str = ""
    images: list[str] = Field(min_length=1)
    sku: str = Field(min_length=1, max_length=100)
    is_sale: bool = False
    sale_end_date: str | None = None
    colors: list[str] = Field(min_length=1)
    sizes: list[SizeIn] = Field(min_length=1)
    keywords: list[str] = Field(default_factory=list)

    @field_validator("name", "variant_name", "brand", "sku")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("keywords", "colors")
    @classmethod
    def strip_items(cls, v: list[str]) -> list[str]:
        items = [item.strip() for item in v]
        if any(not item for item in items):
            raise ValueError("items cannot be empty")
        return items


class SizeRead(SQLModel):
    id: uuid.UUID
    size: str
    quantity: int
    price: float
    discount: float


class VariantRead(SQLModel):
    """
    Variant with its images, colors and sizes.
    """

    id: uuid.UUID
    product_id: uuid.UUID
    variant_name: str
    variant_description: str
    variant_image: str
    slug: str
    is_sale: bool
    sale_end_date: str | None
    sku: str
    keywords: list[str]
    images: list[str]
    colors: list[str]
    sizes: list[SizeRead]
    created_at: datetime
    updated_at: datetime


class ProductRead(SQLModel):
    """
    Product representation for clients, with all of its variants.
    """

    id: uuid.UUID
    name: str
    description: str
    slug: str
    brand: str
    store_id: uuid.UUID
    category_id: uuid.UUID
    subcategory_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    variants: list[VariantRead] = []
