"""Vote coordination: ledger write and score delta as one unit of work."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from voteboard.core.errors import ConflictError, NotFoundError, StorageFailureError
from voteboard.core.settings import settings
from voteboard.models.post import Post
from voteboard.models.vote import DOWNVOTE, UPVOTE, PostVote
from voteboard.repositories.post_repo import ScoreAggregator
from voteboard.repositories.vote_repo import VoteLedger

__all__ = [
    "Transition",
    "VoteCoordinator",
    "VoteResult",
    "decide_transition",
    "normalize_value",
]

logger = logging.getLogger(__name__)


class Transition(enum.Enum):
    """How a vote request changes the ledger."""

    CREATE = "create"
    FLIP = "flip"
    NOOP = "noop"


@dataclass(frozen=True)
class VoteResult:
    """Outcome of one applied vote request."""

    transition: Transition
    delta: int
    score: int


def normalize_value(value: int) -> int:
    """Collapse a raw vote value to 1 or -1.

    Zero counts as an upvote. Any non-negative value maps to 1 and any
    negative value maps to -1.
    """
    return UPVOTE if value >= 0 else DOWNVOTE


def decide_transition(existing: PostVote | None, value: int) -> tuple[Transition, int]:
    """Return the transition and signed score delta for casting ``value``.

    A flip moves the score by twice the new value: the old vote's contribution
    is removed and the new one added in a single step.
    """
    if existing is None:
        return Transition.CREATE, value
    if existing.value == value:
        return Transition.NOOP, 0
    return Transition.FLIP, 2 * value


class VoteCoordinator:
    """Orchestrates the vote ledger and score aggregator per request.

    Every call to :meth:`cast_vote` runs in its own session and transaction.
    Lost races on the (voter, post) record are retried from a fresh read.
    Everything else is reported as a plain ``False``.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        ledger: VoteLedger | None = None,
        aggregator: ScoreAggregator | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self._session_factory = session_factory
        self.ledger = ledger or VoteLedger()
        self.aggregator = aggregator or ScoreAggregator()
        if max_attempts is None:
            max_attempts = settings.vote_max_attempts
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts!r}")
        self.max_attempts = max_attempts

    def cast_vote(self, actor_id: int | None, post_id: int, value: int) -> bool:
        """Record ``actor_id``'s vote on ``post_id``.

        Args:
            actor_id: Authenticated voter, or ``None`` for an anonymous request.
            post_id: Target post.
            value: Raw vote value; see :func:`normalize_value`.

        Returns:
            True if the vote is recorded (including a repeat of the same
            direction) and the post score reflects it; False otherwise.
        """
        if actor_id is None:
            logger.info("Rejected vote on post %s: unauthenticated", post_id)
            return False

        normalized = normalize_value(value)
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = self._run_unit(actor_id, post_id, normalized)
            except ConflictError as exc:
                logger.info(
                    "Vote conflict for voter %s on post %s (attempt %d/%d): %s",
                    actor_id,
                    post_id,
                    attempt,
                    self.max_attempts,
                    exc,
                )
                continue
            except NotFoundError:
                logger.info("Rejected vote by %s: post %s not found", actor_id, post_id)
                return False
            except StorageFailureError:
                logger.exception("Vote by %s on post %s could not be stored", actor_id, post_id)
                return False
            except Exception:  # noqa: BLE001
                logger.exception("Unexpected error casting vote by %s on post %s", actor_id, post_id)
                return False

            logger.debug(
                "Vote by %s on post %s: %s (delta %+d, score %d)",
                actor_id,
                post_id,
                result.transition.value,
                result.delta,
                result.score,
            )
            return True

        logger.warning(
            "Giving up on vote by %s on post %s after %d conflicting attempts",
            actor_id,
            post_id,
            self.max_attempts,
        )
        return False

    def vote_status(self, session: Session, actor_id: int | None, post_id: int) -> int | None:
        """Return the requesting actor's own vote on a post, if any."""
        if actor_id is None:
            return None
        vote = self.ledger.get_vote(session, actor_id, post_id)
        return vote.value if vote is not None else None

    def _run_unit(self, actor_id: int, post_id: int, value: int) -> VoteResult:
        session = self._session_factory()
        try:
            with session.begin():
                return self._apply(session, actor_id, post_id, value)
        except SQLAlchemyError as exc:
            raise StorageFailureError(str(exc)) from exc
        finally:
            session.close()

    def _apply(self, session: Session, actor_id: int, post_id: int, value: int) -> VoteResult:
        post = session.get(Post, post_id)
        if post is None:
            raise NotFoundError(f"Post {post_id} not found")

        existing = self.ledger.get_vote(session, actor_id, post_id)
        transition, delta = decide_transition(existing, value)
        if transition is Transition.NOOP:
            return VoteResult(transition, 0, post.score)

        previous = existing.value if existing is not None else None
        self.ledger.upsert_vote(session, actor_id, post_id, value, previous=previous)
        score = self.aggregator.apply_delta(session, post_id, delta)
        return VoteResult(transition, delta, score)
