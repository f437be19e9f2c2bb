"""CRUD-style helpers for login accounts (the identity collaborator)."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sponsormatch.core import security
from sponsormatch.core.errors import AuthenticationError, ConflictError, ValidationError
from sponsormatch.models import UserAccount

__all__ = [
    "authenticate",
    "create_account",
    "get_account",
    "get_user_type",
]

USER_TYPES = ("athlete", "sponsor")


def get_account(db: Session, user_id: str) -> UserAccount | None:
    """Return a single account by primary key."""
    return db.get(UserAccount, user_id)


def get_user_type(db: Session, user_id: str) -> str | None:
    """Return the user-type claim of an account, or None if unknown."""
    account = get_account(db, user_id)
    return account.user_type if account else None


def create_account(db: Session, email: str, password: str, user_type: str) -> UserAccount:
    """Persist a new account with a hashed password."""
    if user_type not in USER_TYPES:
        raise ValidationError(f"Unknown user type: {user_type!r}")
    account = UserAccount(
        email=email,
        password_hash=security.hash_password(password),
        user_type=user_type,
    )
    db.add(account)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Email already registered") from exc
    db.refresh(account)
    return account


def authenticate(db: Session, email: str, password: str) -> UserAccount:
    """Return the account matching the credentials."""
    account = db.scalars(select(UserAccount).where(UserAccount.email == email)).first()
    if account is None or not security.verify_password(account.password_hash, password):
        raise AuthenticationError("Invalid email or password")
    return account
