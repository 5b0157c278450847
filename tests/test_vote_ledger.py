"""Tests for the vote ledger repository."""

import pytest

from voteboard.core.errors import ConflictError, StorageFailureError
from voteboard.models import PostVote
from voteboard.repositories.vote_repo import VoteLedger


def test_get_vote_absent(db_session, test_user, test_post) -> None:
    """No record exists before the first vote."""
    assert VoteLedger().get_vote(db_session, test_user.id, test_post.id) is None


def test_upsert_creates_record(session_factory, test_user, test_post) -> None:
    ledger = VoteLedger()
    with session_factory() as session, session.begin():
        vote = ledger.upsert_vote(session, test_user.id, test_post.id, 1)
        assert vote.value == 1

    with session_factory() as session:
        stored = ledger.get_vote(session, test_user.id, test_post.id)
        assert stored is not None
        assert stored.value == 1


def test_duplicate_insert_raises_conflict(session_factory, test_user, test_post) -> None:
    """A second insert for the same pair loses to the primary key."""
    ledger = VoteLedger()
    with session_factory() as session, session.begin():
        ledger.upsert_vote(session, test_user.id, test_post.id, 1)

    with session_factory() as session:
        with pytest.raises(ConflictError):
            with session.begin():
                ledger.upsert_vote(session, test_user.id, test_post.id, -1)

    with session_factory() as session:
        rows = session.query(PostVote).filter_by(post_id=test_post.id).all()
        assert [(row.voter_id, row.value) for row in rows] == [(test_user.id, 1)]


def test_conflicting_insert_keeps_outer_transaction_usable(
    session_factory, test_user, test_post
) -> None:
    """The failed insert only rolls back its savepoint."""
    ledger = VoteLedger()
    with session_factory() as session, session.begin():
        ledger.upsert_vote(session, test_user.id, test_post.id, 1)

    with session_factory() as session, session.begin():
        with pytest.raises(ConflictError):
            ledger.upsert_vote(session, test_user.id, test_post.id, 1)
        assert ledger.get_vote(session, test_user.id, test_post.id).value == 1


def test_update_flips_value(session_factory, test_user, test_post) -> None:
    ledger = VoteLedger()
    with session_factory() as session, session.begin():
        ledger.upsert_vote(session, test_user.id, test_post.id, 1)

    with session_factory() as session, session.begin():
        vote = ledger.upsert_vote(session, test_user.id, test_post.id, -1, previous=1)
        assert vote.value == -1

    with session_factory() as session:
        assert ledger.get_vote(session, test_user.id, test_post.id).value == -1


def test_update_with_stale_previous_raises_conflict(session_factory, test_user, test_post) -> None:
    """An update based on an outdated read must not silently apply."""
    ledger = VoteLedger()
    with session_factory() as session, session.begin():
        ledger.upsert_vote(session, test_user.id, test_post.id, -1)

    with session_factory() as session:
        with pytest.raises(ConflictError):
            with session.begin():
                ledger.upsert_vote(session, test_user.id, test_post.id, -1, previous=1)


def test_update_missing_record_raises_conflict(session_factory, test_user, test_post) -> None:
    with session_factory() as session:
        with pytest.raises(ConflictError):
            with session.begin():
                VoteLedger().upsert_vote(session, test_user.id, test_post.id, 1, previous=-1)


@pytest.mark.parametrize("value", [0, 2, -3])
def test_rejects_unnormalized_values(db_session, test_user, test_post, value) -> None:
    with pytest.raises(ValueError):
        VoteLedger().upsert_vote(db_session, test_user.id, test_post.id, value)


def test_insert_for_unknown_voter_is_storage_failure(session_factory, test_user, test_post) -> None:
    """Foreign-key violations are not reported as duplicate votes."""
    ledger = VoteLedger()
    with session_factory() as session, session.begin():
        with pytest.raises(StorageFailureError):
            ledger.upsert_vote(session, test_user.id + 1000, test_post.id, 1)
        assert ledger.get_vote(session, test_user.id + 1000, test_post.id) is None
