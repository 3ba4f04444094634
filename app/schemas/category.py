# app/schemas/category.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from app.schemas.validators import NAME_RE, URL_RE, check_pattern


class CategoryUpsert(SQLModel):
    """
    Payload for creating or updating a category.

    - id is optional: a fresh UUID is assigned when omitted (create).
    """

    model_config = ConfigDict(extra="forbid")

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(min_length=2, max_length=50)
    image: str = Field(min_length=1)
    url: str = Field(min_length=2, max_length=50)
    featured: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_pattern(
            v,
            NAME_RE,
            "Only letters, numbers, and spaces are allowed in the category name.",
        )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return check_pattern(
            v,
            URL_RE,
            "Only letters, numbers, hyphen, and underscore are allowed in the "
            "category url, and consecutive occurrences of hyphens, underscores, "
            "or spaces are not permitted.",
        )


class CategoryRead(SQLModel):
    """Category representation for clients."""

    id: uuid.UUID
    name: str
    image: str
    url: str
    featured: bool
    created_at: datetime
    updated_at: datetime


class SubCategoryUpsert(SQLModel):
    """
    Payload for creating or updating a subcategory.

    `category_id` must reference an existing category.
    """

    model_config = ConfigDict(extra="forbid")

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(min_length=2, max_length=50)
    image: str = Field(min_length=1)
    url: str = Field(min_length=2, max_length=50)
    category_id: uuid.UUID
    featured: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_pattern(
            v,
            NAME_RE,
            "Only letters, numbers, and spaces are allowed in the subCategory name.",
        )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return check_pattern(
            v,
            URL_RE,
            "Only letters, numbers, hyphen, and underscore are allowed in the "
            "subCategory url, and consecutive occurrences of hyphens, "
            "underscores, or spaces are not permitted.",
        )


class SubCategoryRead(SQLModel):
    id: uuid.UUID
    name: str
    image: str
    url: str
    featured: bool
    category_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class SubCategoryWithCategoryRead(SubCategoryRead):
    """Subcategory together with its parent category (dashboard tables)."""

    category: CategoryRead
