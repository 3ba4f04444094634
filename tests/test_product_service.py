import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.models.category import Category, SubCategory
from app.models.product import (
    Color,
    Product,
    ProductVariant,
    ProductVariantImage,
    Size,
)
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.store_repo import StoreRepository
from app.repositories.subcategory_repo import SubCategoryRepository
from app.schemas.product import ProductUpsert
from app.services.product_service import ProductService


@pytest.fixture
def service():
    return ProductService(
        ProductRepository(),
        StoreRepository(),
        CategoryRepository(),
        SubCategoryRepository(),
    )


@pytest.fixture
def payload_for(category, subcategory):
    def _payload(**overrides) -> ProductUpsert:
        values = {
            "name": "Air Runner",
            "description": "Lightweight running shoe",
            "brand": "Acme",
            "category_id": category.id,
            "subcategory_id": subcategory.id,
            "variant_name": "Air Runner Blue",
            "variant_image": "https://img.example.com/blue-thumb.png",
            "images": [
                "https://img.example.com/blue-1.png",
                "https://img.example.com/blue-2.png",
            ],
            "sku": "AR-BLUE",
            "colors": ["Blue"],
            "sizes": [{"size": "42", "quantity": 5, "price": 99.0}],
            "keywords": ["running", "shoe"],
        }
        values.update(overrides)
        return ProductUpsert(**values)

    return _payload


def test_create_product_generates_slugs(session, service, seller, store, payload_for):
    result = service.upsert_product(session, seller, store.url, payload_for())

    assert result.slug == "air-runner"
    assert result.store_id == store.id
    assert len(result.variants) == 1

    variant = result.variants[0]
    assert variant.slug == "air-runner-blue"
    assert variant.images == [
        "https://img.example.com/blue-1.png",
        "https://img.example.com/blue-2.png",
    ]
    assert variant.colors == ["Blue"]
    assert variant.sizes[0].price == 99.0
    assert variant.keywords == ["running", "shoe"]


def test_same_name_gets_suffixed_slug(session, service, seller, store, payload_for):
    service.upsert_product(session, seller, store.url, payload_for())
    second = service.upsert_product(session, seller, store.url, payload_for())

    assert second.slug == "air-runner-1"
    assert second.variants[0].slug == "air-runner-blue-1"


def test_update_keeps_slug_and_replaces_children(
    session, service, seller, store, payload_for
):
    created = service.upsert_product(session, seller, store.url, payload_for())
    variant_id = created.variants[0].id

    updated = service.upsert_product(
        session,
        seller,
        store.url,
        payload_for(
            product_id=created.id,
            variant_id=variant_id,
            name="Air Runner Pro",
            colors=["Navy", "White"],
            sizes=[
                {"size": "41", "quantity": 2, "price": 120.0},
                {"size": "43", "quantity": 1, "price": 120.0, "discount": 10},
            ],
        ),
    )

    assert updated.id == created.id
    assert updated.name == "Air Runner Pro"
    assert updated.slug == "air-runner"
    assert len(session.exec(select(Product)).all()) == 1
    assert len(session.exec(select(ProductVariant)).all()) == 1

    variant = updated.variants[0]
    assert variant.colors == ["Navy", "White"]
    assert sorted(s.size for s in variant.sizes) == ["41", "43"]
    assert len(session.exec(select(Color)).all()) == 2
    assert len(session.exec(select(Size)).all()) == 2


def test_new_variant_for_existing_product(session, service, seller, store, payload_for):
    created = service.upsert_product(session, seller, store.url, payload_for())

    updated = service.upsert_product(
        session,
        seller,
        store.url,
        payload_for(product_id=created.id, variant_name="Air Runner Red", sku="AR-RED"),
    )

    assert [v.slug for v in updated.variants] == ["air-runner-blue", "air-runner-red"]


def test_store_must_belong_to_seller(session, service, make_user, store, payload_for):
    other = make_user("seller")

    with pytest.raises(NotFoundError, match="Store not found"):
        service.upsert_product(session, other, store.url, payload_for())


def test_admin_cannot_upsert_products(session, service, admin, store, payload_for):
    with pytest.raises(AuthorizationError):
        service.upsert_product(session, admin, store.url, payload_for())


def test_unknown_subcategory(session, service, seller, store, payload_for):
    with pytest.raises(NotFoundError, match="SubCategory not found"):
        service.upsert_product(
            session, seller, store.url, payload_for(subcategory_id=uuid.uuid4())
        )


def test_subcategory_must_match_category(
    session, service, seller, store, payload_for, category
):
    sport = Category(name="Sport", image="https://img.example.com/sport.png", url="sport")
    session.add(sport)
    session.commit()
    stray = SubCategory(
        name="Stray",
        image="https://img.example.com/stray.png",
        url="stray",
        category_id=sport.id,
    )
    session.add(stray)
    session.commit()
    session.refresh(stray)

    with pytest.raises(ValidationError):
        service.upsert_product(
            session, seller, store.url, payload_for(subcategory_id=stray.id)
        )


def test_missing_payload(session, service, seller, store):
    with pytest.raises(ValidationError, match="Please provide product data."):
        service.upsert_product(session, seller, store.url, None)


def test_list_and_get(session, service, seller, store, payload_for):
    created = service.upsert_product(session, seller, store.url, payload_for())

    listed = service.list_store_products(session, seller, store.url)
    fetched = service.get_product(session, created.id)

    assert [p.id for p in listed] == [created.id]
    assert fetched.variants[0].sku == "AR-BLUE"


def test_delete_product(session, service, seller, store, payload_for):
    created = service.upsert_product(session, seller, store.url, payload_for())
    service.upsert_product(
        session,
        seller,
        store.url,
        payload_for(product_id=created.id, variant_name="Air Runner Red", sku="AR-RED"),
    )

    service.delete_product(session, seller, created.id)

    assert session.exec(select(Product)).all() == []
    assert session.exec(select(ProductVariant)).all() == []
    assert session.exec(select(ProductVariantImage)).all() == []
    assert session.exec(select(Color)).all() == []
    assert session.exec(select(Size)).all() == []


def test_delete_product_leaves_other_products(
    session, service, seller, store, payload_for
):
    doomed = service.upsert_product(session, seller, store.url, payload_for())
    kept = service.upsert_product(
        session, seller, store.url, payload_for(name="Trail Runner", sku="TR-1")
    )

    service.delete_product(session, seller, doomed.id)

    assert [p.id for p in session.exec(select(Product)).all()] == [kept.id]
    assert len(session.exec(select(ProductVariantImage)).all()) == 2
    assert len(session.exec(select(Size)).all()) == 1


def test_delete_requires_ownership(session, service, make_user, seller, store, payload_for):
    created = service.upsert_product(session, seller, store.url, payload_for())
    other = make_user("seller")

    with pytest.raises(AuthorizationError):
        service.delete_product(session, other, created.id)


class RacingProductRepository(ProductRepository):
    """Fails the final commit the way a concurrent insert would."""

    def save(self, session, product, variant, images, colors, sizes):
        raise IntegrityError("INSERT INTO products", {}, Exception("UNIQUE constraint failed"))


def test_commit_race_reports_generic_conflict(session, seller, store, payload_for):
    service = ProductService(
        RacingProductRepository(),
        StoreRepository(),
        CategoryRepository(),
        SubCategoryRepository(),
    )

    with pytest.raises(ConflictError, match="conflicts with data saved at the same time"):
        service.upsert_product(session, seller, store.url, payload_for())

    assert session.exec(select(Product)).all() == []
