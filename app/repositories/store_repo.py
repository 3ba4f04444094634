# app/repositories/store_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session, select

from app.models.store import Store


class StoreRepository:
    """
    Data access layer for Store.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, store_id: uuid.UUID) -> Store | None:
        return session.get(Store, store_id)

    def get_by_url(self, session: Session, url: str) -> Store | None:
        stmt = select(Store).where(Store.url == url)
        return session.exec(stmt).first()

    def list_for_user(self, session: Session, user_id: str) -> list[Store]:
        stmt = (
            select(Store)
            .where(Store.user_id == user_id)
            .order_by(Store.created_at)
        )
        return session.exec(stmt).all()

    def upsert(
        self,
        session: Session,
        store_id: uuid.UUID,
        values: dict[str, Any],
        owner_id: str,
    ) -> Store:
        """
        Create the store for `owner_id` if `store_id` is unknown,
        else replace the given fields. Owner never changes on update.
        """
        store = session.get(Store, store_id)
        if store is None:
            store = Store(id=store_id, user_id=owner_id, **values)
        else:
            store.sqlmodel_update(values)
            store.updated_at = datetime.now(timezone.utc)

        session.add(store)
        session.commit()
        session.refresh(store)
        return store

    def update(self, session: Session, store: Store) -> Store:
        store.updated_at = datetime.now(timezone.utc)
        session.add(store)
        session.commit()
        session.refresh(store)
        return store
