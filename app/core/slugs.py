# app/core/slugs.py
import re
from enum import Enum

from sqlmodel import Session, select

from app.core.config import get_settings
from app.core.exceptions import GenerationError
from app.models.category import Category, SubCategory
from app.models.product import Product, ProductVariant
from app.models.store import Store


class SlugTarget(str, Enum):
    PRODUCT = "product"
    VARIANT = "variant"
    STORE = "store"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"


# Column that holds the slug for each target collection
SLUG_COLUMNS = {
    SlugTarget.PRODUCT: Product.slug,
    SlugTarget.VARIANT: ProductVariant.slug,
    SlugTarget.STORE: Store.url,
    SlugTarget.CATEGORY: Category.url,
    SlugTarget.SUBCATEGORY: SubCategory.url,
}


def slugify(raw: str, fallback: str = "item") -> str:
    """
    Basic slugification:
      - lowercase
      - non-alphanumeric -> '-'
      - collapse multiple '-'
      - strip leading/trailing '-'
    """
    value = raw.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    value = re.sub(r"-+", "-", value)
    value = value.strip("-")
    return value or fallback


def slug_exists(session: Session, target: SlugTarget, slug: str) -> bool:
    column = SLUG_COLUMNS[target]
    stmt = select(column).where(column == slug).limit(1)
    return session.exec(stmt).first() is not None


def generate_unique_slug(
    session: Session,
    base_slug: str,
    target: SlugTarget,
    separator: str = "-",
    max_attempts: int | None = None,
) -> str:
    """
    Return `base_slug`, or the first free `base_slug{separator}N` (N = 1, 2, ...).

    Examples (target already holds "widget" and "widget-1"):
        generate_unique_slug(session, "widget", SlugTarget.PRODUCT) -> "widget-2"

    Raises:
        GenerationError: if more than `max_attempts` suffixes are taken.
    """
    if max_attempts is None:
        max_attempts = get_settings().SLUG_MAX_ATTEMPTS

    slug = base_slug
    suffix = 1
    while slug_exists(session, target, slug):
        if suffix > max_attempts:
            raise GenerationError(
                f"Could not generate a unique slug for '{base_slug}' "
                f"after {max_attempts} attempts"
            )
        slug = f"{base_slug}{separator}{suffix}"
        suffix += 1
    return slug
