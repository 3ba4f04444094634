# app/routers/products.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import get_current_user
from app.database import get_session
from app.models.user import User
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.store_repo import StoreRepository
from app.repositories.subcategory_repo import SubCategoryRepository
from app.schemas.product import ProductRead, ProductUpsert
from app.services.product_service import ProductService

router = APIRouter(tags=["Products"])

repo = ProductRepository()
service = ProductService(
    repo,
    StoreRepository(),
    CategoryRepository(),
    SubCategoryRepository(),
)


# -------- Public endpoints --------


@router.get("/products/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single product with its variants.
    """
    return service.get_product(session, product_id)


# -------- Seller endpoints --------


@router.get("/stores/{store_url}/products", response_model=list[ProductRead])
def list_store_products(
    store_url: str,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    List products of one of the caller's stores (seller only).
    """
    return service.list_store_products(session, current_user, store_url)


@router.put("/stores/{store_url}/products", response_model=ProductRead)
def upsert_product(
    store_url: str,
    payload: ProductUpsert,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Create or update a product + variant in one of the caller's stores.
    """
    return service.upsert_product(session, current_user, store_url, payload)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
):
    """
    Delete a product and all of its variants (seller who owns it).
    """
    service.delete_product(session, current_user, product_id)
    return None
