# src/voteboard/api/v1/endpoints/posts.py
"""Post-related endpoints for the Voteboard API."""

from datetime import datetime
from typing import NoReturn

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.orm import Session

from voteboard.api.v1.dependencies import (
    CoordinatorDep,
    CurrentActorDep,
    CurrentUserDep,
    OptionalActorDep,
    SessionDep,
)
from voteboard.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from voteboard.models import Post
from voteboard.schemas.post import PaginatedPosts, PostCreate, PostResponse, PostUpdate
from voteboard.services import post_service
from voteboard.services.vote_service import VoteCoordinator

router = APIRouter(prefix="/posts", tags=["posts"])


def _to_response(
    post: Post,
    *,
    db: Session,
    coordinator: VoteCoordinator,
    actor_id: int | None,
) -> PostResponse:
    response = PostResponse.model_validate(post)
    response.description_snippet = post_service.description_snippet(post)
    response.vote_status = coordinator.vote_status(db, actor_id, post.id)
    return response


def _raise_for(exc: Exception) -> NoReturn:
    if isinstance(exc, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found") from exc
    if isinstance(exc, PermissionDeniedError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    if isinstance(exc, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"field": exc.field, "message": exc.message},
        ) from exc
    raise exc


@router.get("/", response_model=PaginatedPosts)
async def list_posts(
    db: SessionDep,
    coordinator: CoordinatorDep,
    actor_id: OptionalActorDep,
    limit: int = Query(10, ge=1, description="Maximum number of posts to return"),
    cursor: datetime | None = Query(None, description="Return posts created before this time"),
) -> PaginatedPosts:
    """List posts newest first using a creation-time cursor.

    Args:
        db: Database session
        coordinator: Vote coordinator used to look up the caller's votes
        actor_id: Requesting user, if authenticated
        limit: Maximum number of posts (clamped to the configured page size)
        cursor: Only posts created strictly before this timestamp are returned

    Returns:
        The page of posts and whether older posts remain
    """
    page = post_service.list_posts(db, limit, cursor)
    return PaginatedPosts(
        posts=[
            _to_response(post, db=db, coordinator=coordinator, actor_id=actor_id)
            for post in page.posts
        ],
        has_more=page.has_more,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    db: SessionDep,
    coordinator: CoordinatorDep,
    actor_id: OptionalActorDep,
) -> PostResponse:
    """Get a specific post by ID."""
    try:
        post = post_service.get_post(db, post_id)
    except NotFoundError as exc:
        _raise_for(exc)
    return _to_response(post, db=db, coordinator=coordinator, actor_id=actor_id)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    coordinator: CoordinatorDep,
) -> PostResponse:
    """Create a new post authored by the current user."""
    try:
        post = post_service.create_post(
            db,
            creator_id=current_user.id,
            title=post_data.title,
            description=post_data.description,
        )
    except ValidationError as exc:
        _raise_for(exc)
    return _to_response(post, db=db, coordinator=coordinator, actor_id=current_user.id)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    actor_id: CurrentActorDep,
    db: SessionDep,
    coordinator: CoordinatorDep,
) -> PostResponse:
    """Edit the title or description of one of the caller's posts."""
    try:
        post = post_service.update_post(
            db,
            post_id=post_id,
            actor_id=actor_id,
            title=post_data.title,
            description=post_data.description,
        )
    except (NotFoundError, PermissionDeniedError) as exc:
        _raise_for(exc)
    return _to_response(post, db=db, coordinator=coordinator, actor_id=actor_id)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, actor_id: CurrentActorDep, db: SessionDep) -> None:
    """Delete one of the caller's posts together with its votes."""
    try:
        post_service.delete_post(db, post_id=post_id, actor_id=actor_id)
    except (NotFoundError, PermissionDeniedError) as exc:
        _raise_for(exc)
