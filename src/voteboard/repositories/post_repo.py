"""Data access helpers for working with posts."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload

from voteboard.core.errors import NotFoundError
from voteboard.models.post import Post
from voteboard.models.vote import PostVote

__all__ = ["PostRepository", "ScoreAggregator"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def list_before(self, limit: int, cursor: datetime | None = None) -> list[Post]:
        """Return up to ``limit`` posts with their creators, newest first, created before ``cursor``."""
        stmt = select(Post).options(selectinload(Post.creator))
        if cursor is not None:
            stmt = stmt.where(Post.created_at < cursor)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc()).limit(limit)
        return list(self.session.execute(stmt).scalars())

    def create(self, *, creator_id: int, title: str, description: str) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(creator_id=creator_id, title=title, description=description, score=0)
        self.session.add(post)
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove a post together with its ledger entries."""
        self.session.execute(delete(PostVote).where(PostVote.post_id == post.id))
        self.session.delete(post)
        self.session.flush()


class ScoreAggregator:
    """Maintains ``Post.score`` as a running total of vote deltas.

    Deltas are applied as a single ``score = score + :delta`` statement so the
    database performs the arithmetic. Concurrent deltas on one post therefore
    accumulate instead of overwriting each other.
    """

    def apply_delta(self, session: Session, post_id: int, delta: int) -> int:
        """Add ``delta`` to the stored score of ``post_id``.

        Args:
            session: Session bound to the caller's transaction.
            post_id: Identifier of the post whose score changes.
            delta: Signed, non-zero amount to add.

        Returns:
            The score after the update, as seen inside the caller's transaction.

        Raises:
            ValueError: If ``delta`` is zero.
            NotFoundError: If the post does not exist.
        """
        if delta == 0:
            raise ValueError("Score delta must be non-zero")

        result = session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(score=Post.score + delta)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"Post {post_id} not found")

        # Reload so an instance already in the identity map reflects the stored total.
        post = session.execute(
            select(Post)
            .where(Post.id == post_id)
            .execution_options(populate_existing=True)
        ).scalar_one()
        return post.score
