"""Service-level helpers for authoring and listing posts."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from voteboard.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from voteboard.core.settings import settings
from voteboard.models.post import Post
from voteboard.repositories.post_repo import PostRepository


@dataclass
class PostPage:
    """One page of posts plus whether an older page exists."""

    posts: list[Post]
    has_more: bool


def list_posts(db: Session, limit: int, cursor: datetime | None = None) -> PostPage:
    """Return the newest posts created strictly before ``cursor``.

    ``limit`` is clamped to ``settings.posts_page_max``. One extra row is
    fetched to tell whether more posts follow.
    """
    real_limit = max(1, min(settings.posts_page_max, limit))
    posts = PostRepository(db).list_before(real_limit + 1, cursor)
    return PostPage(posts=posts[:real_limit], has_more=len(posts) == real_limit + 1)


def get_post(db: Session, post_id: int) -> Post:
    """Return a post or raise :class:`NotFoundError`."""
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise NotFoundError("post not found")
    return post


def create_post(db: Session, *, creator_id: int, title: str, description: str) -> Post:
    """Create a post with a zero score."""
    if not title.strip():
        raise ValidationError("title", "title must not be empty")
    post = PostRepository(db).create(
        creator_id=creator_id,
        title=title,
        description=description,
    )
    db.commit()
    db.refresh(post)
    return post


def update_post(
    db: Session,
    *,
    post_id: int,
    actor_id: int,
    title: str | None = None,
    description: str | None = None,
) -> Post:
    """Apply a partial update to a post owned by ``actor_id``.

    The score is never writable here; it only moves through votes.
    """
    post = get_post(db, post_id)
    if post.creator_id != actor_id:
        raise PermissionDeniedError("You can only edit your own posts")
    if title:
        post.title = title
    if description:
        post.description = description
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, *, post_id: int, actor_id: int) -> None:
    """Delete a post owned by ``actor_id`` along with its votes."""
    post = get_post(db, post_id)
    if post.creator_id != actor_id:
        raise PermissionDeniedError("You can only delete your own posts")
    PostRepository(db).delete(post)
    db.commit()


def description_snippet(post: Post) -> str:
    """Return the leading characters of the post description."""
    return post.description[: settings.snippet_length]
