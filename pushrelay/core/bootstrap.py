"""Startup preparation of the account store."""

from typing import TYPE_CHECKING

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from pushrelay.models import Base
from pushrelay.services.accounts import ensure_bootstrap_admin

if TYPE_CHECKING:
    from pushrelay.core.config import Settings


def bootstrap_store(engine: Engine, session_factory: sessionmaker, settings: "Settings") -> None:
    """
    Create the users table and its unique indexes if missing, then ensure the admin exists.
    Idempotent. Raises SQLAlchemyError when the store is unreachable.
    """
    Base.metadata.create_all(bind=engine)
    db = session_factory()
    try:
        ensure_bootstrap_admin(db, settings)
    finally:
        db.close()
