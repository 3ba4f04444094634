# app/repositories/user_repo.py
from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """
    Storage for the local mirror of identity provider users.

    Rows are keyed by the provider's user id; email is unique so a
    provider account maps to at most one row. Roles live only here.
    """

    def get_by_id(self, session: Session, user_id: str) -> User | None:
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Fallback lookup for rows whose provider id was never synced."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def list(self, session: Session, skip: int = 0, limit: int = 50) -> list[User]:
        """Users oldest first, for the admin role screen."""
        stmt = select(User).order_by(User.created_at).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def create(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """
        Commit profile or role changes.

        A changed email that another row already holds fails here with
        IntegrityError; callers translate it.
        """
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        """Remove the mirror row. Fails with IntegrityError while stores reference it."""
        session.delete(user)
        session.commit()
