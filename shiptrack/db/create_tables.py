"""Create the shiptrack schema (users, sessions, ship groups and their members)."""
from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from shiptrack.core.logging import get_logger
from shiptrack.db import models  # noqa: F401  # registers the mapped tables
from shiptrack.db.session import Base, get_engine

logger = get_logger(__name__)


def create_all() -> list[str]:
    """Create any missing tables and return the shiptrack table names present afterwards."""
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    present = set(inspect(engine).get_table_names())
    tables = sorted(name for name in Base.metadata.tables if name in present)
    logger.info("Schema ready", tables=tables)
    return tables


if __name__ == "__main__":
    try:
        names = create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create shiptrack tables: {exc}") from exc
    print("Shiptrack tables ready: " + ", ".join(names))
