# app/services/user_service.py
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.uniqueness import raise_for_integrity_error
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserRoleUpdate, WebhookEvent, WebhookUserData

logger = logging.getLogger(__name__)

USER_UPSERT_EVENTS = {"user.created", "user.updated"}
USER_DELETE_EVENT = "user.deleted"


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - mirror identity provider users into the local table (webhook)
      - role management (admin)
      - map missing rows to NotFoundError
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    # ----- Self profile -----

    def get_me(self, current_user: User) -> User:
        """Return the current authenticated user."""
        return current_user

    # ----- Admin operations -----

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """List users with pagination (admin only)."""
        return self.repo.list(session, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: str) -> User:
        """
        Get a user by id (admin only).

        Raises:
            NotFoundError: if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_role(
        self,
        session: Session,
        user_id: str,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Change user's role (admin only).

        Role validation is enforced by the schema (Literal).
        """
        user = self.get_user(session, user_id)
        user.role = payload.role
        user.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, user)

    # ----- Identity provider sync -----

    @staticmethod
    def _display_name(data: WebhookUserData) -> str:
        """
        "First Last", else the username, else "User".
        """
        full_name = f"{data.first_name or ''} {data.last_name or ''}".strip()
        return full_name or data.username or "User"

    def handle_webhook_event(self, session: Session, event: WebhookEvent) -> User | None:
        """
        Apply one identity provider event to the users table.

        - user.created / user.updated: upsert by provider id, falling back
          to email for rows created before the id was known. Email, name
          and picture are refreshed; new rows start with role "user".
        - user.deleted: delete by id.
        - anything else is ignored.

        Returns:
            The stored user for upsert events, None otherwise.

        Raises:
            ValidationError: upsert event without an email address.
            ConflictError: the email belongs to another user, or the user
                being deleted still owns stores.
            NotFoundError: delete event for an unknown user.
        """
        data = event.data

        if event.type in USER_UPSERT_EVENTS:
            logger.info("[Webhook] Processing %s for user %s", event.type, data.id)

            if not data.email_addresses:
                raise ValidationError("User email is required")
            email = data.email_addresses[0].email_address

            name = self._display_name(data)
            picture = data.image_url or ""

            user = self.repo.get_by_id(session, data.id) or self.repo.get_by_email(
                session, email
            )
            user_id = user.id if user else data.id
            try:
                if user:
                    user.email = email
                    user.name = name
                    user.picture = picture
                    user.updated_at = datetime.now(timezone.utc)
                    user = self.repo.update(session, user)
                else:
                    user = self.repo.create(
                        session,
                        User(
                            id=data.id, name=name, email=email, picture=picture, role="user"
                        ),
                    )
            except IntegrityError as exc:
                raise_for_integrity_error(
                    session,
                    User,
                    ("email",),
                    {"email": email},
                    user_id,
                    "user",
                    exc,
                )

            logger.info("[Webhook] Saved user %s", user.id)
            return user

        if event.type == USER_DELETE_EVENT:
            user = self.repo.get_by_id(session, data.id)
            if not user:
                raise NotFoundError("User not found")
            try:
                self.repo.delete(session, user)
            except IntegrityError as exc:
                session.rollback()
                raise ConflictError("User still owns stores") from exc
            logger.info("[Webhook] Deleted user %s", data.id)
            return None

        logger.info("[Webhook] Ignoring event type %s", event.type)
        return None
