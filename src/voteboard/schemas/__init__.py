"""Pydantic schemas for the Voteboard API."""

from .post import PaginatedPosts, PostAuthor, PostCreate, PostResponse, PostUpdate
from .user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .vote import MyVote, VoteCreate, VoteOutcome

__all__ = [
    "LoginRequest",
    "MyVote",
    "PaginatedPosts",
    "PostCreate",
    "PostAuthor",
    "PostResponse",
    "PostUpdate",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "VoteCreate",
    "VoteOutcome",
]
