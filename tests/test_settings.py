"""Tests for application settings."""

import pytest

from voteboard.core.settings import Settings


@pytest.mark.parametrize(
    ("use_test_database", "expected"),
    [(False, "sqlite:///./main.db"), (True, "sqlite:///./test.db")],
)
def test_effective_database_url(use_test_database, expected) -> None:
    configured = Settings(
        SECRET_KEY="x",
        DATABASE_URL="sqlite:///./main.db",
        TEST_DATABASE_URL="sqlite:///./test.db",
        USE_TEST_DATABASE=use_test_database,
    )
    assert configured.effective_database_url == expected


def test_postgres_url_is_used_unchanged() -> None:
    url = "postgresql+psycopg://voteboard@localhost/voteboard"
    assert Settings(SECRET_KEY="x", DATABASE_URL=url).effective_database_url == url
