# app/routers/stores.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import get_current_user
from app.database import get_session
from app.models.user import User
from app.repositories.store_repo import StoreRepository
from app.schemas.store import StoreRead, StoreStatusUpdate, StoreUpsert
from app.services.store_service import StoreService

router = APIRouter(prefix="/stores", tags=["Stores"])

repo = StoreRepository()
service = StoreService(repo)


# -------- Seller endpoints --------


@router.get("/mine", response_model=list[StoreRead])
def list_my_stores(
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    List the caller's stores (seller only).
    """
    return service.list_my_stores(session, current_user)


@router.get("/{store_url}", response_model=StoreRead)
def get_store(
    store_url: str,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Get one of the caller's stores by url (seller only).
    """
    return service.get_store_by_url(session, current_user, store_url)


@router.put("", response_model=StoreRead)
def upsert_store(
    payload: StoreUpsert,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Create or update a store (seller only).

    - 409 names the first colliding field: name, email, phone number, URL.
    """
    return service.upsert_store(session, current_user, payload)


# -------- Admin endpoints --------


@router.patch("/{store_id}/status", response_model=StoreRead)
def change_store_status(
    store_id: uuid.UUID,
    payload: StoreStatusUpdate,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Approve, ban or disable a store (admin only).
    """
    return service.update_store_status(session, current_user, store_id, payload)
