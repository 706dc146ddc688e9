# create_tables.py — run once to create missing tables (development helper)
import logging, sys

from expense_tracker.core.config import settings
from expense_tracker.db.session import Database

logger = logging.getLogger(__name__)


def main(database=None) -> int:
    database = database or Database(settings.DATABASE_URL)
    logger.info("Creating tables in the database (if not exist)...")
    try:
        database.create_all()
        logger.info("Done.")
        return 0
    except Exception:
        logger.exception("Error creating tables:")
        return 1
    finally:
        database.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
