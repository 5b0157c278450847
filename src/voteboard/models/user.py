# src/voteboard/models/user.py
"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from voteboard.db.session import Base
from voteboard.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    """Registered account able to author posts and cast votes."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
