import uuid

import pytest
from sqlmodel import select

from app.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from app.models.category import Category, SubCategory
from app.models.product import Product
from app.repositories.category_repo import CategoryRepository
from app.repositories.subcategory_repo import SubCategoryRepository
from app.schemas.category import SubCategoryUpsert
from app.services.subcategory_service import SubCategoryService


@pytest.fixture
def service():
    return SubCategoryService(SubCategoryRepository(), CategoryRepository())


def subcategory_payload(category_id, **overrides) -> SubCategoryUpsert:
    values = {
        "name": "Boots",
        "image": "https://img.example.com/boots.png",
        "url": "boots",
        "category_id": category_id,
    }
    values.update(overrides)
    return SubCategoryUpsert(**values)


def test_create_subcategory(session, service, admin, category):
    result = service.upsert_subcategory(session, admin, subcategory_payload(category.id))

    assert result.category_id == category.id
    assert result.url == "boots"


def test_parent_category_must_exist(session, service, admin):
    with pytest.raises(NotFoundError, match="Category not found"):
        service.upsert_subcategory(session, admin, subcategory_payload(uuid.uuid4()))

    assert session.exec(select(SubCategory)).all() == []


def test_conflict_on_url(session, service, admin, category, subcategory):
    payload = subcategory_payload(category.id, url="sneakers")

    with pytest.raises(ConflictError) as exc_info:
        service.upsert_subcategory(session, admin, payload)

    assert exc_info.value.message == "A subCategory with the same URL already exists"


def test_same_name_as_a_category_is_allowed(session, service, admin, category):
    result = service.upsert_subcategory(
        session, admin, subcategory_payload(category.id, name="Shoes", url="shoes")
    )

    assert result.name == "Shoes"


def test_move_to_another_category(session, service, admin, category, subcategory):
    other = Category(name="Sport", image="https://img.example.com/s.png", url="sport")
    session.add(other)
    session.commit()
    session.refresh(other)

    payload = subcategory_payload(
        other.id,
        id=subcategory.id,
        name=subcategory.name,
        url=subcategory.url,
    )
    result = service.upsert_subcategory(session, admin, payload)

    assert result.id == subcategory.id
    assert result.category_id == other.id


def test_seller_cannot_upsert(session, service, seller, category):
    with pytest.raises(AuthorizationError):
        service.upsert_subcategory(session, seller, subcategory_payload(category.id))


def test_list_includes_parent_category(session, service, subcategory):
    items = service.list_subcategories(session)

    assert len(items) == 1
    assert items[0].name == "Sneakers"
    assert items[0].category.name == "Shoes"


def test_list_for_category(session, service, category, subcategory):
    assert [s.id for s in service.list_for_category(session, category.id)] == [
        subcategory.id
    ]

    with pytest.raises(NotFoundError):
        service.list_for_category(session, uuid.uuid4())


def test_delete_subcategory(session, service, admin, subcategory):
    subcategory_id = subcategory.id

    service.delete_subcategory(session, admin, subcategory_id)

    with pytest.raises(NotFoundError):
        service.get_subcategory(session, subcategory_id)


def test_delete_subcategory_with_products_is_a_conflict(
    session, service, admin, store, category, subcategory
):
    session.add(
        Product(
            name="Air Runner",
            description="desc",
            slug="air-runner",
            brand="Acme",
            store_id=store.id,
            category_id=category.id,
            subcategory_id=subcategory.id,
        )
    )
    session.commit()

    with pytest.raises(ConflictError, match="still referenced by products"):
        service.delete_subcategory(session, admin, subcategory.id)

    assert service.get_subcategory(session, subcategory.id).name == "Sneakers"
