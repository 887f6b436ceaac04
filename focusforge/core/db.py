from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=4)
def get_engine(dsn: str) -> Engine:
    return create_engine(dsn, future=True, pool_pre_ping=True)


def connect_database(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connected successfully")


def create_schema(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata.
    from focusforge.infrastructure.db.models import users  # noqa: F401

    Base.metadata.create_all(engine)


def disconnect_database(engine: Engine) -> None:
    engine.dispose()
    logger.info("Database disconnected successfully")
