# src/voteboard/models/__init__.py
"""SQLAlchemy models for the Voteboard application."""

from .post import Post
from .user import User
from .vote import DOWNVOTE, UPVOTE, PostVote

__all__ = [
    "Post",
    "User",
    "PostVote", "UPVOTE", "DOWNVOTE",
]
