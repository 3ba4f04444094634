# app/routers/webhooks.py
import hmac

from fastapi import APIRouter, Depends, Header
from sqlmodel import Session

from app.core.config import get_settings
from app.core.exceptions import AuthenticationError
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.user import WebhookEvent
from app.services.user_service import UserService

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

settings = get_settings()

repo = UserRepository()
service = UserService(repo)


def verify_webhook_secret(
    x_webhook_secret: str | None = Header(default=None),
) -> None:
    """
    Reject calls that do not carry the shared webhook secret.
    """
    if not x_webhook_secret or not hmac.compare_digest(
        x_webhook_secret.encode(), settings.WEBHOOK_SECRET.encode()
    ):
        raise AuthenticationError("Invalid webhook secret")


@router.post("/identity", dependencies=[Depends(verify_webhook_secret)])
def identity_webhook(
    event: WebhookEvent,
    session: Session = Depends(get_session),
) -> dict[str, str]:
    """
    Sync users from the identity provider.

    Handles user.created, user.updated and user.deleted; other
    event types are acknowledged and ignored.
    """
    service.handle_webhook_event(session, event)
    return {"message": "Webhook received"}
