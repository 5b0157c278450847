# src/voteboard/models/post.py
"""SQLAlchemy model for posts and their cached score."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voteboard.db.session import Base
from voteboard.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from voteboard.models.user import User


class Post(TimestampMixin, Base):
    """Content entity authored by a user.

    ``score`` is a denormalized projection of the vote ledger: it must always
    equal the sum of ``PostVote.value`` for this post. It is only ever changed
    through ``ScoreAggregator.apply_delta``.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    score: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)

    creator: Mapped["User"] = relationship("User")
