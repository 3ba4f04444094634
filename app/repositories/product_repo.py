# app/repositories/product_repo.py
import uuid

from sqlmodel import Session, select

from app.models.product import (
    Color,
    Product,
    ProductVariant,
    ProductVariantImage,
    Size,
)


class ProductRepository:
    """
    Data access layer for Product, ProductVariant and variant children
    (images, colors, sizes).

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    # ----- Products -----

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def list_for_store(self, session: Session, store_id: uuid.UUID) -> list[Product]:
        stmt = (
            select(Product)
            .where(Product.store_id == store_id)
            .order_by(Product.updated_at.desc())
        )
        return session.exec(stmt).all()

    def delete(self, session: Session, product: Product) -> None:
        """
        Delete a product with all of its variants and their children.

        There are no ORM relationships between these tables, so each level
        is flushed before its parent is deleted.
        """
        variants = self.list_variants(session, product.id)
        for variant in variants:
            self._delete_variant_children(session, variant.id)
        session.flush()

        for variant in variants:
            session.delete(variant)
        session.flush()

        session.delete(product)
        session.commit()

    # ----- Variants -----

    def get_variant(
        self, session: Session, variant_id: uuid.UUID
    ) -> ProductVariant | None:
        return session.get(ProductVariant, variant_id)

    def list_variants(
        self, session: Session, product_id: uuid.UUID
    ) -> list[ProductVariant]:
        stmt = (
            select(ProductVariant)
            .where(ProductVariant.product_id == product_id)
            .order_by(ProductVariant.created_at)
        )
        return session.exec(stmt).all()

    def list_images(
        self, session: Session, variant_id: uuid.UUID
    ) -> list[ProductVariantImage]:
        stmt = (
            select(ProductVariantImage)
            .where(ProductVariantImage.variant_id == variant_id)
            .order_by(ProductVariantImage.sort_order)
        )
        return session.exec(stmt).all()

    def list_colors(self, session: Session, variant_id: uuid.UUID) -> list[Color]:
        stmt = select(Color).where(Color.variant_id == variant_id)
        return session.exec(stmt).all()

    def list_sizes(self, session: Session, variant_id: uuid.UUID) -> list[Size]:
        stmt = select(Size).where(Size.variant_id == variant_id)
        return session.exec(stmt).all()

    def save(
        self,
        session: Session,
        product: Product,
        variant: ProductVariant,
        images: list[ProductVariantImage],
        colors: list[Color],
        sizes: list[Size],
    ) -> Product:
        """
        Persist a product and one variant in a single commit.

        The variant's images, colors and sizes are replaced wholesale.
        Parents are flushed before children so foreign keys hold.
        """
        session.add(product)
        session.flush()
        session.add(variant)
        session.flush()
        self._delete_variant_children(session, variant.id)
        session.flush()
        session.add_all([*images, *colors, *sizes])
        session.commit()
        session.refresh(product)
        return product

    def _delete_variant_children(self, session: Session, variant_id: uuid.UUID) -> None:
        for model in (ProductVariantImage, Color, Size):
            stmt = select(model).where(model.variant_id == variant_id)
            for row in session.exec(stmt).all():
                session.delete(row)
