"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., max_length=10_000)


class PostUpdate(BaseModel):
    """Partial update of a post; omitted or empty fields are left unchanged."""

    title: str | None = Field(None, max_length=300)
    description: str | None = Field(None, max_length=10_000)


class PostAuthor(BaseModel):
    """Public summary of the user who wrote a post."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    description: str
    description_snippet: str = ""
    creator_id: int
    creator: PostAuthor
    score: int
    vote_status: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaginatedPosts(BaseModel):
    """A page of posts ordered newest first."""

    posts: list[PostResponse]
    has_more: bool
