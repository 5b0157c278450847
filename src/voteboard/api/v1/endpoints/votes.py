# src/voteboard/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Voteboard API."""

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from voteboard.api.v1.dependencies import (
    CoordinatorDep,
    CurrentActorDep,
    OptionalActorDep,
    SessionDep,
)
from voteboard.schemas.vote import MyVote, VoteCreate, VoteOutcome

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteOutcome)
async def cast_vote(
    vote_data: VoteCreate,
    coordinator: CoordinatorDep,
    actor_id: OptionalActorDep,
) -> VoteOutcome:
    """Cast a vote on a post.

    Always answers 200; ``success`` is false when the caller is anonymous,
    the post does not exist, or the vote could not be stored.
    """
    success = await run_in_threadpool(
        coordinator.cast_vote, actor_id, vote_data.post_id, vote_data.value
    )
    return VoteOutcome(success=success)


@router.get("/{post_id}/my-vote", response_model=MyVote)
async def get_my_vote(
    post_id: int,
    actor_id: CurrentActorDep,
    db: SessionDep,
    coordinator: CoordinatorDep,
) -> MyVote:
    """Get the current user's vote on a specific post."""
    return MyVote(value=coordinator.vote_status(db, actor_id, post_id))
