# app/services/category_service.py
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.auth import ensure_role
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.uniqueness import ensure_unique, raise_for_integrity_error
from app.models.category import Category
from app.models.user import User
from app.repositories.category_repo import CategoryRepository
from app.schemas.category import CategoryUpsert

logger = logging.getLogger(__name__)

# Checked in this order; the first collision is the one reported
CATEGORY_UNIQUE_FIELDS = ("name", "url")


class CategoryService:
    """
    Business logic for Category.

    Responsibilities:
      - admin-only writes
      - name / url uniqueness across categories
      - mapping missing rows to NotFoundError
    """

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def list_categories(self, session: Session) -> list[Category]:
        return self.repo.list(session)

    def get_category(self, session: Session, category_id: uuid.UUID) -> Category:
        category = self.repo.get_by_id(session, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def upsert_category(
        self,
        session: Session,
        current_user: User | None,
        payload: CategoryUpsert | None,
    ) -> Category:
        """
        Create or update a category (admin only).

        Steps:
          1. Caller must be an authenticated admin.
          2. Payload must be present.
          3. No other category may share the name or url.
          4. Upsert by id and return the stored row.
        """
        ensure_role(current_user, "admin")

        if payload is None:
            raise ValidationError("Please provide category data.")

        values = payload.model_dump(exclude={"id"})
        ensure_unique(
            session, Category, CATEGORY_UNIQUE_FIELDS, values, payload.id, "category"
        )

        try:
            return self.repo.upsert(session, payload.id, values)
        except IntegrityError as exc:
            raise_for_integrity_error(
                session,
                Category,
                CATEGORY_UNIQUE_FIELDS,
                values,
                payload.id,
                "category",
                exc,
            )

    def delete_category(
        self,
        session: Session,
        current_user: User | None,
        category_id: uuid.UUID,
    ) -> None:
        """
        Delete a category (admin only).

        Raises:
            ConflictError: if subcategories or products still reference it.
        """
        admin = ensure_role(current_user, "admin")
        category = self.get_category(session, category_id)

        try:
            self.repo.delete(session, category)
        except IntegrityError as exc:
            session.rollback()
            raise ConflictError(
                "Category is still referenced by subcategories or products"
            ) from exc

        logger.info("Category %s deleted by %s", category_id, admin.id)
