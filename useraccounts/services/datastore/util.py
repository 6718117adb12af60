"""Helpers for working with the account database."""

from typing import Generator
from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .models import Base

logger = logging.getLogger(__name__)


def new_engine(database_uri: str) -> Engine:
    """Create an engine for the account database."""
    logger.debug('New database engine for %s', database_uri.split('://')[0])
    return create_engine(database_uri)


def new_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def transaction(factory: sessionmaker) -> Generator:
    """Context manager for database transaction."""
    session = factory()
    try:
        yield session
        # Flushed changes leave ``session.new`` empty; commit regardless.
        session.commit()
    except Exception as e:
        logger.warning('Commit failed, rolling back: %s', str(e))
        session.rollback()
        raise
    finally:
        session.close()


def create_all(engine: Engine) -> None:
    """Create all tables in the database."""
    Base.metadata.create_all(engine)


def drop_all(engine: Engine) -> None:
    """Drop all tables in the database."""
    Base.metadata.drop_all(engine)


def is_available(factory: sessionmaker) -> bool:
    """Check our connection to the database."""
    try:
        with transaction(factory) as session:
            session.execute(text('SELECT 1')).all()
    except Exception as e:
        logger.error('Encountered an error talking to database: %s', e)
        return False
    return True
