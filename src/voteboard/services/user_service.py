"""Helpers for registering and authenticating users."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from voteboard.core import security
from voteboard.core.errors import ConflictError, ValidationError
from voteboard.models.user import User

__all__ = [
    "MIN_NAME_LENGTH",
    "MAX_PASSWORD_BYTES",
    "MIN_PASSWORD_LENGTH",
    "authenticate",
    "get_user",
    "register_user",
]

MIN_NAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def register_user(db: Session, *, name: str, email: str, password: str) -> User:
    """Persist a new user with a hashed password.

    Raises:
        ValidationError: If the name is too short or the password length is out of range.
        ConflictError: If the email address is already registered.
    """
    if len(name) < MIN_NAME_LENGTH:
        raise ValidationError("name", f"name must be at least {MIN_NAME_LENGTH} characters")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            "password", f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            "password", f"password must be at most {MAX_PASSWORD_BYTES} bytes"
        )

    user = User(name=name, email=email.lower(), password_hash=security.hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("email already exists") from err
    db.refresh(user)
    return user


def authenticate(db: Session, *, email: str, password: str) -> User | None:
    """Return the user matching the credentials, or ``None``."""
    user = db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()
    if user is None:
        return None
    if not security.verify_password(password, user.password_hash):
        return None
    return user
