"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote.

    ``value`` is taken as-is and normalized by the coordinator: any
    non-negative integer is an upvote, any negative integer a downvote.
    """

    post_id: int
    value: int = Field(..., description="Vote direction; >= 0 upvotes, < 0 downvotes")


class VoteOutcome(BaseModel):
    """Boolean result of a vote request."""

    success: bool


class MyVote(BaseModel):
    """The requesting user's own vote on a post."""

    value: int | None = Field(None, description="1, -1, or null when no vote exists")
