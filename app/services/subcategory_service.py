# app/services/subcategory_service.py
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.auth import ensure_role
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.uniqueness import ensure_unique, raise_for_integrity_error
from app.models.category import SubCategory
from app.models.user import User
from app.repositories.category_repo import CategoryRepository
from app.repositories.subcategory_repo import SubCategoryRepository
from app.schemas.category import (
    CategoryRead,
    SubCategoryUpsert,
    SubCategoryWithCategoryRead,
)

logger = logging.getLogger(__name__)

SUBCATEGORY_UNIQUE_FIELDS = ("name", "url")


class SubCategoryService:
    """
    Business logic for SubCategory.

    Same rules as categories, plus the parent category must exist.
    """

    def __init__(
        self,
        repo: SubCategoryRepository,
        category_repo: CategoryRepository,
    ):
        self.repo = repo
        self.category_repo = category_repo

    def list_subcategories(self, session: Session) -> list[SubCategoryWithCategoryRead]:
        return [
            SubCategoryWithCategoryRead(
                **subcategory.model_dump(),
                category=CategoryRead.model_validate(category),
            )
            for subcategory, category in self.repo.list_with_category(session)
        ]

    def list_for_category(
        self, session: Session, category_id: uuid.UUID
    ) -> list[SubCategory]:
        if not self.category_repo.get_by_id(session, category_id):
            raise NotFoundError("Category not found")
        return self.repo.list_for_category(session, category_id)

    def get_subcategory(
        self, session: Session, subcategory_id: uuid.UUID
    ) -> SubCategory:
        subcategory = self.repo.get_by_id(session, subcategory_id)
        if not subcategory:
            raise NotFoundError("SubCategory not found")
        return subcategory

    def upsert_subcategory(
        self,
        session: Session,
        current_user: User | None,
        payload: SubCategoryUpsert | None,
    ) -> SubCategory:
        """
        Create or update a subcategory (admin only).

        Raises:
            ConflictError: another subcategory already has the name or url.
            NotFoundError: `category_id` does not reference a category.
        """
        ensure_role(current_user, "admin")

        if payload is None:
            raise ValidationError("Please provide subCategory data.")

        values = payload.model_dump(exclude={"id"})
        ensure_unique(
            session,
            SubCategory,
            SUBCATEGORY_UNIQUE_FIELDS,
            values,
            payload.id,
            "subCategory",
        )

        if not self.category_repo.get_by_id(session, payload.category_id):
            raise NotFoundError("Category not found")

        try:
            return self.repo.upsert(session, payload.id, values)
        except IntegrityError as exc:
            raise_for_integrity_error(
                session,
                SubCategory,
                SUBCATEGORY_UNIQUE_FIELDS,
                values,
                payload.id,
                "subCategory",
                exc,
            )

    def delete_subcategory(
        self,
        session: Session,
        current_user: User | None,
        subcategory_id: uuid.UUID,
    ) -> None:
        admin = ensure_role(current_user, "admin")
        subcategory = self.get_subcategory(session, subcategory_id)

        try:
            self.repo.delete(session, subcategory)
        except IntegrityError as exc:
            session.rollback()
            raise ConflictError("SubCategory is still referenced by products") from exc

        logger.info("SubCategory %s deleted by %s", subcategory_id, admin.id)
