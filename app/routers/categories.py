# app/routers/categories.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import get_current_user
from app.database import get_session
from app.models.user import User
from app.repositories.category_repo import CategoryRepository
from app.repositories.subcategory_repo import SubCategoryRepository
from app.schemas.category import CategoryRead, CategoryUpsert, SubCategoryRead
from app.services.category_service import CategoryService
from app.services.subcategory_service import SubCategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])

repo = CategoryRepository()
service = CategoryService(repo)
subcategory_service = SubCategoryService(SubCategoryRepository(), repo)


# -------- Public endpoints --------


@router.get("", response_model=list[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    """
    List all categories, most recently updated first.
    """
    return service.list_categories(session)


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_category(session, category_id)


@router.get("/{category_id}/subcategories", response_model=list[SubCategoryRead])
def list_category_subcategories(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    List the subcategories of one category.
    """
    return subcategory_service.list_for_category(session, category_id)


# -------- Admin endpoints --------


@router.put("", response_model=CategoryRead)
def upsert_category(
    payload: CategoryUpsert,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Create or update a category (admin only).

    - 409 if another category already uses the name or url.
    """
    return service.upsert_category(session, current_user, payload)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Delete a category (admin only).
    """
    service.delete_category(session, current_user, category_id)
    return None
