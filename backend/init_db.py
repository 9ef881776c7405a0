from sqlalchemy import inspect
from sqlalchemy.engine import Engine
import logging

from database import Base
import models  # noqa: F401  registers the tables on Base.metadata

logger = logging.getLogger(__name__)

REQUIRED_TABLES = (
    "customers",
    "customer_measurements",
    "customer_notes",
    "appointments",
    "work_orders",
    "work_order_items",
)


def missing_tables(engine: Engine) -> list:
    """Return the required tables that do not exist yet."""
    existing = set(inspect(engine).get_table_names())
    return [table for table in REQUIRED_TABLES if table not in existing]


def init_database(engine: Engine):
    """
    Create any missing tables.

    Existing tables are left untouched, so this is safe to run on every
    startup.
    """
    missing = missing_tables(engine)
    if not missing:
        logger.info("Database schema is up to date")
        return

    logger.info(f"Creating tables: {', '.join(missing)}")
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized successfully")
