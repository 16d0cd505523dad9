"""
User repository.

Accounts are looked up by id (bearer tokens) or by email (login).
Emails are stored lower-cased, so lookups normalise their input the
same way.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.user import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Persistence for :class:`User` accounts."""

    def __init__(self, session: Session):
        self.session = session

    def save(self, user: User) -> User:
        """Insert or update *user* and reload generated columns."""
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    # Registration and profile edits read better with explicit names
    create = save
    update = save

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == normalize_email(email))
        return self.session.exec(statement).first()

    def exists_by_email(self, email: str) -> bool:
        statement = select(User.id).where(User.email == normalize_email(email))
        return self.session.exec(statement).first() is not None
