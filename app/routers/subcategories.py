# app/routers/subcategories.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import get_current_user
from app.database import get_session
from app.models.user import User
from app.repositories.category_repo import CategoryRepository
from app.repositories.subcategory_repo import SubCategoryRepository
from app.schemas.category import (
    SubCategoryRead,
    SubCategoryUpsert,
    SubCategoryWithCategoryRead,
)
from app.services.subcategory_service import SubCategoryService

router = APIRouter(prefix="/subcategories", tags=["SubCategories"])

repo = SubCategoryRepository()
service = SubCategoryService(repo, CategoryRepository())


# -------- Public endpoints --------


@router.get("", response_model=list[SubCategoryWithCategoryRead])
def list_subcategories(session: Session = Depends(get_session)):
    """
    List all subcategories with their parent category.
    """
    return service.list_subcategories(session)


@router.get("/{subcategory_id}", response_model=SubCategoryRead)
def get_subcategory(
    subcategory_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_subcategory(session, subcategory_id)


# -------- Admin endpoints --------


@router.put("", response_model=SubCategoryRead)
def upsert_subcategory(
    payload: SubCategoryUpsert,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Create or update a subcategory (admin only).

    - 404 if the parent category does not exist.
    - 409 if another subcategory already uses the name or url.
    """
    return service.upsert_subcategory(session, current_user, payload)


@router.delete("/{subcategory_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subcategory(
    subcategory_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    service.delete_subcategory(session, current_user, subcategory_id)
    return None
