import os
import uuid
from datetime import datetime, timedelta, timezone

# Settings are read at import time, so the environment must be ready first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ["WEBHOOK_SECRET"] = "test-webhook-secret"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import enable_sqlite_foreign_keys, get_session
from app.main import app
from app.models.category import Category, SubCategory
from app.models.store import Store
from app.models.user import User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    def _make(role: str = "user", user_id: str | None = None) -> User:
        user_id = user_id or f"user_{uuid.uuid4().hex[:12]}"
        user = User(
            id=user_id,
            name=f"{role.title()} Person",
            email=f"{user_id}@example.com",
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin")


@pytest.fixture
def seller(make_user):
    return make_user("seller")


def auth_headers(user: User) -> dict[str, str]:
    token = jwt.encode(
        {"sub": user.id, "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "test-secret",
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def category(session):
    category = Category(name="Shoes", image="https://img.example.com/shoes.png", url="shoes")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@pytest.fixture
def subcategory(session, category):
    subcategory = SubCategory(
        name="Sneakers",
        image="https://img.example.com/sneakers.png",
        url="sneakers",
        category_id=category.id,
    )
    session.add(subcategory)
    session.commit()
    session.refresh(subcategory)
    return subcategory


def store_values(**overrides) -> dict:
    values = {
        "name": "Corner Shop",
        "description": "A friendly corner shop selling everyday goods.",
        "email": "corner@example.com",
        "phone": "+15550001",
        "logo": "https://img.example.com/logo.png",
        "cover": "https://img.example.com/cover.png",
        "url": "corner-shop",
    }
    values.update(overrides)
    return values


@pytest.fixture
def store(session, seller):
    store = Store(user_id=seller.id, **store_values())
    session.add(store)
    session.commit()
    session.refresh(store)
    return store
