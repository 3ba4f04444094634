# app/services/store_service.py
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.auth import ensure_role
from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.core.uniqueness import ensure_unique, raise_for_integrity_error
from app.models.store import Store
from app.models.user import User
from app.repositories.store_repo import StoreRepository
from app.schemas.store import StoreStatusUpdate, StoreUpsert

logger = logging.getLogger(__name__)

# Checked in this order; the first collision is the one reported
STORE_UNIQUE_FIELDS = ("name", "email", "phone", "url")


class StoreService:
    """
    Business logic for Store.

    Responsibilities:
      - seller-only writes, scoped to the seller's own stores
      - name / email / phone / url uniqueness across stores
      - status changes (admin only)
    """

    def __init__(self, repo: StoreRepository):
        self.repo = repo

    def list_my_stores(self, session: Session, current_user: User | None) -> list[Store]:
        seller = ensure_role(current_user, "seller")
        return self.repo.list_for_user(session, seller.id)

    def get_store_by_url(
        self,
        session: Session,
        current_user: User | None,
        url: str,
    ) -> Store:
        """
        Return one of the caller's stores by url.

        Stores owned by someone else are reported as missing.
        """
        seller = ensure_role(current_user, "seller")
        store = self.repo.get_by_url(session, url)
        if not store or store.user_id != seller.id:
            raise NotFoundError("Store not found")
        return store

    def upsert_store(
        self,
        session: Session,
        current_user: User | None,
        payload: StoreUpsert | None,
    ) -> Store:
        """
        Create or update a store (seller only).

        Steps:
          1. Caller must be an authenticated seller.
          2. Payload must be present.
          3. No other store may share the name, email, phone or url.
          4. An existing store with this id must belong to the caller.
          5. Upsert by id: new stores start as PENDING and are owned by
             the caller; updates keep owner and status.
        """
        seller = ensure_role(current_user, "seller")

        if payload is None:
            raise ValidationError("Please provide store data.")

        values = payload.model_dump(exclude={"id"})
        ensure_unique(session, Store, STORE_UNIQUE_FIELDS, values, payload.id, "store")

        existing = self.repo.get_by_id(session, payload.id)
        if existing and existing.user_id != seller.id:
            raise AuthorizationError("Unauthorized Access: Store belongs to another seller.")

        try:
            store = self.repo.upsert(session, payload.id, values, owner_id=seller.id)
        except IntegrityError as exc:
            raise_for_integrity_error(
                session, Store, STORE_UNIQUE_FIELDS, values, payload.id, "store", exc
            )

        if existing is None:
            logger.info("Store %s created by seller %s", store.id, seller.id)
        return store

    def update_store_status(
        self,
        session: Session,
        current_user: User | None,
        store_id: uuid.UUID,
        payload: StoreStatusUpdate,
    ) -> Store:
        """Change a store's status (admin only)."""
        admin = ensure_role(current_user, "admin")

        store = self.repo.get_by_id(session, store_id)
        if not store:
            raise NotFoundError("Store not found")

        store.status = payload.status
        logger.info("Store %s set to %s by %s", store_id, payload.status, admin.id)
        return self.repo.update(session, store)
