# app/core/auth.py
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.database import get_session
from app.models.user import User

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support "guest" mode (unauthenticated).
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an identity-provider access token (JWT).

    Verification:
      - signature (HS256 using AUTH_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified

    Raises:
        AuthenticationError: if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise AuthenticationError("Invalid or expired token")


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a bearer JWT.

    Flow:
      1. If no Authorization header => guest => return None.
      2. Decode JWT => extract 'sub' (identity provider user id).
      3. Load the user row synced by the identity webhook.

    Returns:
        User instance if authenticated, else None for guests.

    Raises:
        AuthenticationError: if the token is malformed, or its user
        has not been synced yet.
    """
    if credentials is None:
        return None  # guest mode

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    if not sub:
        raise AuthenticationError("Token missing sub")

    user = session.get(User, sub)
    if user is None:
        raise AuthenticationError("Unknown user")
    return user


def ensure_role(user: User | None, role: str) -> User:
    """
    Gate an operation on the caller's role.

    Raises:
        AuthenticationError: if there is no caller.
        AuthorizationError: if the caller's role differs from `role`.
    """
    if user is None:
        raise AuthenticationError("Unauthenticated.")
    if user.role != role:
        raise AuthorizationError(
            f"Unauthorized Access: {role.capitalize()} Privileges Required for Entry."
        )
    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    If attached to a route, guests (missing JWT) will be rejected with 401.
    """
    if user is None:
        raise AuthenticationError("Authentication required")
    return user


def require_admin(user: User | None = Depends(get_current_user)) -> User:
    """Enforce admin role (401 for guests, 403 for other roles)."""
    return ensure_role(user, "admin")
