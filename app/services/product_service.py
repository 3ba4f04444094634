# app/services/product_service.py
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.auth import ensure_role
from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.core.slugs import SlugTarget, generate_unique_slug, slugify
from app.models.product import (
    Color,
    Product,
    ProductVariant,
    ProductVariantImage,
    Size,
)
from app.models.store import Store
from app.models.user import User
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.store_repo import StoreRepository
from app.repositories.subcategory_repo import SubCategoryRepository
from app.schemas.product import ProductRead, ProductUpsert, SizeRead, VariantRead

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for Product & ProductVariant.

    Responsibilities:
      - seller-only writes, scoped to the seller's own stores
      - slug generation for new products and variants
      - category / subcategory consistency
      - assembling product + variants read models
    """

    def __init__(
        self,
        repo: ProductRepository,
        store_repo: StoreRepository,
        category_repo: CategoryRepository,
        subcategory_repo: SubCategoryRepository,
    ):
        self.repo = repo
        self.store_repo = store_repo
        self.category_repo = category_repo
        self.subcategory_repo = subcategory_repo

    # ----- Helpers -----

    def _get_owned_store(self, session: Session, seller: User, store_url: str) -> Store:
        store = self.store_repo.get_by_url(session, store_url)
        if not store or store.user_id != seller.id:
            raise NotFoundError("Store not found")
        return store

    def _validate_taxonomy(self, session: Session, payload: ProductUpsert) -> None:
        if not self.category_repo.get_by_id(session, payload.category_id):
            raise NotFoundError("Category not found")

        subcategory = self.subcategory_repo.get_by_id(session, payload.subcategory_id)
        if not subcategory:
            raise NotFoundError("SubCategory not found")
        if subcategory.category_id != payload.category_id:
            raise ValidationError("SubCategory does not belong to the selected category")

    def _to_read(self, session: Session, product: Product) -> ProductRead:
        variants: list[VariantRead] = []
        for variant in self.repo.list_variants(session, product.id):
            variants.append(
                VariantRead(
                    **variant.model_dump(),
                    images=[img.url for img in self.repo.list_images(session, variant.id)],
                    colors=[c.name for c in self.repo.list_colors(session, variant.id)],
                    sizes=[
                        SizeRead.model_validate(s)
                        for s in self.repo.list_sizes(session, variant.id)
                    ],
                )
            )
        return ProductRead(**product.model_dump(), variants=variants)

    # ----- Products -----

    def get_product(self, session: Session, product_id: uuid.UUID) -> ProductRead:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return self._to_read(session, product)

    def list_store_products(
        self,
        session: Session,
        current_user: User | None,
        store_url: str,
    ) -> list[ProductRead]:
        seller = ensure_role(current_user, "seller")
        store = self._get_owned_store(session, seller, store_url)
        return [
            self._to_read(session, product)
            for product in self.repo.list_for_store(session, store.id)
        ]

    def upsert_product(
        self,
        session: Session,
        current_user: User | None,
        store_url: str,
        payload: ProductUpsert | None,
    ) -> ProductRead:
        """
        Create or update a product and one of its variants (seller only).

        - Unknown product_id => new product with a slug generated from `name`.
        - Unknown variant_id => new variant with a slug generated from
          `variant_name`.
        - Known ids => fields replaced; slugs kept. The variant's images,
          colors and sizes are replaced wholesale.
        """
        seller = ensure_role(current_user, "seller")

        if payload is None:
            raise ValidationError("Please provide product data.")

        store = self._get_owned_store(session, seller, store_url)
        self._validate_taxonomy(session, payload)

        product = self.repo.get_by_id(session, payload.product_id)
        if product and product.store_id != store.id:
            raise AuthorizationError("Unauthorized Access: Product belongs to another store.")

        variant = self.repo.get_variant(session, payload.variant_id)
        if variant and variant.product_id != payload.product_id:
            raise ValidationError("Variant does not belong to this product")

        now = datetime.now(timezone.utc)
        product_values = {
            "name": payload.name,
            "description": payload.description,
            "brand": payload.brand,
            "category_id": payload.category_id,
            "subcategory_id": payload.subcategory_id,
        }
        variant_values = {
            "variant_name": payload.variant_name,
            "variant_description": payload.variant_description,
            "variant_image": payload.variant_image,
            "is_sale": payload.is_sale,
            "sale_end_date": payload.sale_end_date,
            "sku": payload.sku,
            "keywords": payload.keywords,
        }

        if product is None:
            product = Product(
                id=payload.product_id,
                slug=generate_unique_slug(
                    session, slugify(payload.name, "product"), SlugTarget.PRODUCT
                ),
                store_id=store.id,
                **product_values,
            )
        else:
            product.sqlmodel_update(product_values)
            product.updated_at = now

        if variant is None:
            variant = ProductVariant(
                id=payload.variant_id,
                product_id=product.id,
                slug=generate_unique_slug(
                    session, slugify(payload.variant_name, "variant"), SlugTarget.VARIANT
                ),
                **variant_values,
            )
        else:
            variant.sqlmodel_update(variant_values)
            variant.updated_at = now

        images = [
            ProductVariantImage(variant_id=variant.id, url=url, sort_order=i)
            for i, url in enumerate(payload.images)
        ]
        colors = [Color(variant_id=variant.id, name=name) for name in payload.colors]
        sizes = [
            Size(variant_id=variant.id, **size.model_dump()) for size in payload.sizes
        ]

        try:
            product = self.repo.save(session, product, variant, images, colors, sizes)
        except IntegrityError as exc:
            session.rollback()
            raise ConflictError(
                "The product conflicts with data saved at the same time, please retry"
            ) from exc

        return self._to_read(session, product)

    def delete_product(
        self,
        session: Session,
        current_user: User | None,
        product_id: uuid.UUID,
    ) -> None:
        """Delete a product with its variants (seller who owns the store)."""
        seller = ensure_role(current_user, "seller")

        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFoundError("Product not found")

        store = self.store_repo.get_by_id(session, product.store_id)
        if not store or store.user_id != seller.id:
            raise AuthorizationError("Unauthorized Access: Product belongs to another store.")

        self.repo.delete(session, product)
        logger.info("Product %s deleted by seller %s", product_id, seller.id)
