# app/repositories/subcategory_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session, select

from app.models.category import Category, SubCategory


class SubCategoryRepository:
    """
    Data access layer for SubCategory.
    """

    def get_by_id(
        self, session: Session, subcategory_id: uuid.UUID
    ) -> SubCategory | None:
        return session.get(SubCategory, subcategory_id)

    def list_with_category(
        self, session: Session
    ) -> list[tuple[SubCategory, Category]]:
        """(subcategory, parent category) pairs, most recently updated first."""
        stmt = (
            select(SubCategory, Category)
            .join(Category, SubCategory.category_id == Category.id)
            .order_by(SubCategory.updated_at.desc())
        )
        return session.exec(stmt).all()

    def list_for_category(
        self, session: Session, category_id: uuid.UUID
    ) -> list[SubCategory]:
        stmt = (
            select(SubCategory)
            .where(SubCategory.category_id == category_id)
            .order_by(SubCategory.updated_at.desc())
        )
        return session.exec(stmt).all()

    def upsert(
        self,
        session: Session,
        subcategory_id: uuid.UUID,
        values: dict[str, Any],
    ) -> SubCategory:
        subcategory = session.get(SubCategory, subcategory_id)
        if subcategory is None:
            subcategory = SubCategory(id=subcategory_id, **values)
        else:
            subcategory.sqlmodel_update(values)
            subcategory.updated_at = datetime.now(timezone.utc)

        session.add(subcategory)
        session.commit()
        session.refresh(subcategory)
        return subcategory

    def delete(self, session: Session, subcategory: SubCategory) -> None:
        session.delete(subcategory)
        session.commit()
