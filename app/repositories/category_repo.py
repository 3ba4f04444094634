# app/repositories/category_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session, select

from app.models.category import Category


class CategoryRepository:
    """
    Data access layer for Category.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, category_id: uuid.UUID) -> Category | None:
        return session.get(Category, category_id)

    def list(self, session: Session) -> list[Category]:
        """All categories, most recently updated first."""
        stmt = select(Category).order_by(Category.updated_at.desc())
        return session.exec(stmt).all()

    def upsert(
        self,
        session: Session,
        category_id: uuid.UUID,
        values: dict[str, Any],
    ) -> Category:
        """
        Create the row if `category_id` is unknown, else replace its fields.
        """
        category = session.get(Category, category_id)
        if category is None:
            category = Category(id=category_id, **values)
        else:
            category.sqlmodel_update(values)
            category.updated_at = datetime.now(timezone.utc)

        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    def delete(self, session: Session, category: Category) -> None:
        session.delete(category)
        session.commit()
