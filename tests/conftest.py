# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from itertools import count
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, func, select
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from voteboard.api.v1.dependencies import get_vote_coordinator
from voteboard.core.security import create_access_token, hash_password
from voteboard.db.session import Base, build_engine
from voteboard.db.session import get_db as app_get_session
from voteboard.main import app as fastapi_app
from voteboard.models import Post, PostVote, User
from voteboard.services.vote_service import VoteCoordinator

_USER_COUNTER = count(1)
_FIXTURE_PASSWORD = "hunter22"
_FIXTURE_PASSWORD_HASH = hash_password(_FIXTURE_PASSWORD)


@pytest.fixture()
def engine(tmp_path: Path) -> Iterator[Engine]:
    """File-backed SQLite engine so worker threads share one database."""
    engine = build_engine(f"sqlite:///{tmp_path / 'voteboard-test.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(session_factory: sessionmaker[Session]) -> Callable[..., User]:
    """Return a factory persisting users in their own committed transaction."""

    def _make_user(name: str | None = None) -> User:
        n = next(_USER_COUNTER)
        user = User(
            name=name or f"user{n}",
            email=f"user{n}@example.com",
            password_hash=_FIXTURE_PASSWORD_HASH,
        )
        with session_factory() as session, session.begin():
            session.add(user)
        return user

    return _make_user


@pytest.fixture()
def make_post(session_factory: sessionmaker[Session]) -> Callable[..., Post]:
    """Return a factory persisting posts with a zero score."""

    def _make_post(creator: User, title: str = "Test post", description: str = "Body") -> Post:
        post = Post(creator_id=creator.id, title=title, description=description, score=0)
        with session_factory() as session, session.begin():
            session.add(post)
        return post

    return _make_post


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted test user."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("Other User")


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post for tests."""
    return make_post(test_user, description="Test post content")


@pytest.fixture()
def coordinator(session_factory: sessionmaker[Session]) -> VoteCoordinator:
    return VoteCoordinator(session_factory)


@pytest.fixture()
def score_of(session_factory: sessionmaker[Session]) -> Callable[[int], int]:
    """Return a reader for a post's stored score."""

    def _score_of(post_id: int) -> int:
        with session_factory() as session:
            return session.execute(select(Post.score).where(Post.id == post_id)).scalar_one()

    return _score_of


@pytest.fixture()
def ledger_total(session_factory: sessionmaker[Session]) -> Callable[[int], tuple[int, int]]:
    """Return a reader giving (sum of vote values, number of vote rows) for a post."""

    def _ledger_total(post_id: int) -> tuple[int, int]:
        with session_factory() as session:
            total, rows = session.execute(
                select(func.coalesce(func.sum(PostVote.value), 0), func.count())
                .where(PostVote.post_id == post_id)
            ).one()
            return int(total), int(rows)

    return _ledger_total


@pytest.fixture()
def app(
    session_factory: sessionmaker[Session],
    coordinator: VoteCoordinator,
) -> Iterator[FastAPI]:
    def _get_session_override() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[app_get_session] = _get_session_override
    fastapi_app.dependency_overrides[get_vote_coordinator] = lambda: coordinator
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def fixture_password() -> str:
    """Plain-text password shared by fixture users."""
    return _FIXTURE_PASSWORD
