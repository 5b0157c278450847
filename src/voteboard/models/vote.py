# src/voteboard/models/vote.py
"""Models capturing voting interactions on posts."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from voteboard.db.session import Base

UPVOTE = 1
DOWNVOTE = -1


class PostVote(Base):
    """Per-user vote on a post; the ledger entry behind ``Post.score``."""

    __tablename__ = "post_vote"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_post_vote_value"),
        Index("ix_post_vote_post_id", "post_id"),
    )

    # Composite primary key prevents duplicate votes from the same user.
    voter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        primary_key=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # 1 = upvote, -1 = downvote. No row means no vote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
