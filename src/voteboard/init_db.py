"""Create the Voteboard schema on the configured database."""
import argparse
import logging

from voteboard.core.settings import settings
from voteboard.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def init_db(*, reset: bool = False) -> None:
    """Create all tables, optionally dropping existing ones first."""
    if reset:
        logger.warning("Dropping all tables on %s", settings.effective_database_url)
        drop_tables()
    create_tables()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    init_db(reset=args.reset)
    logger.info("Database initialized.")


if __name__ == "__main__":
    main()
