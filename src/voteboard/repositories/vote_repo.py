"""Data access helpers for the vote ledger."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from voteboard.core.errors import ConflictError, StorageFailureError
from voteboard.models.vote import DOWNVOTE, UPVOTE, PostVote

__all__ = ["VoteLedger"]


class VoteLedger:
    """Authoritative store of individual (voter, post) vote records.

    The ledger relies on the composite primary key of ``post_vote`` for
    uniqueness. Racing writers surface as :class:`ConflictError`; callers are
    expected to roll back and retry their unit of work.
    """

    def get_vote(self, session: Session, voter_id: int, post_id: int) -> PostVote | None:
        """Return the vote cast by ``voter_id`` on ``post_id``, if any."""
        return session.execute(
            select(PostVote).where(
                PostVote.voter_id == voter_id,
                PostVote.post_id == post_id,
            )
        ).scalar_one_or_none()

    def upsert_vote(
        self,
        session: Session,
        voter_id: int,
        post_id: int,
        value: int,
        *,
        previous: int | None = None,
    ) -> PostVote:
        """Create or update the vote record for a (voter, post) pair.

        Args:
            session: Session bound to the caller's transaction.
            voter_id: Identifier of the voting user.
            post_id: Identifier of the post being voted on.
            value: New vote value, already normalized to 1 or -1.
            previous: Value the caller observed before deciding on this write.
                ``None`` means the caller saw no record and an insert is attempted.

        Returns:
            The persisted vote record.

        Raises:
            ValueError: If ``value`` is not 1 or -1.
            ConflictError: If a concurrent request created or changed the record
                after the caller read it.
            StorageFailureError: If the insert breaks any other constraint, such as
                a voter or post that no longer exists.
        """
        if value not in (UPVOTE, DOWNVOTE):
            raise ValueError(f"Vote value must be 1 or -1, got {value!r}")

        if previous is None:
            return self._insert(session, voter_id, post_id, value)
        return self._update(session, voter_id, post_id, value, previous)

    def _insert(self, session: Session, voter_id: int, post_id: int, value: int) -> PostVote:
        vote = PostVote(voter_id=voter_id, post_id=post_id, value=value)
        try:
            with session.begin_nested():
                session.add(vote)
                session.flush()
        except IntegrityError as err:
            # Only a record that is now visible means another request won the insert.
            if self.get_vote(session, voter_id, post_id) is not None:
                raise ConflictError(
                    f"Vote for voter {voter_id} on post {post_id} already exists"
                ) from err
            raise StorageFailureError(
                f"Vote for voter {voter_id} on post {post_id} violates a constraint"
            ) from err
        return vote

    def _update(
        self,
        session: Session,
        voter_id: int,
        post_id: int,
        value: int,
        previous: int,
    ) -> PostVote:
        # Compare-and-set on the previously observed value so two flips never
        # both apply their delta.
        result = session.execute(
            update(PostVote)
            .where(
                PostVote.voter_id == voter_id,
                PostVote.post_id == post_id,
                PostVote.value == previous,
            )
            .values(value=value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise ConflictError(
                f"Vote for voter {voter_id} on post {post_id} changed concurrently"
            )
        return session.execute(
            select(PostVote)
            .where(PostVote.voter_id == voter_id, PostVote.post_id == post_id)
            .execution_options(populate_existing=True)
        ).scalar_one()
