"""Shared test helpers: isolated SQLite store and a recording push dispatcher."""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pushrelay.models import Base

SUBSCRIPTION = {
    "endpoint": "https://fcm.googleapis.com/fcm/send/abc123",
    "expirationTime": None,
    "keys": {"p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA_0QTpQtUbVlUls0VJXg7A8u-Ts1XbjhazAkj7I99e8QcYP7DkM", "auth": "tBHItJI5svbpez7KI4CCXg"},
}


def make_store() -> tuple[Engine, sessionmaker]:
    """Fresh in-memory database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeDispatcher:
    """Stands in for PushDispatcher; records calls and optionally raises."""

    def __init__(self, error: Exception | None = None, enabled: bool = True) -> None:
        self.error = error
        self.enabled = enabled
        self.public_key = "test-public-key" if enabled else None
        self.calls: list[tuple[dict[str, Any], dict[str, Any]]] = []

    def send(self, subscription_info: dict[str, Any], payload: dict[str, Any]) -> None:
        self.calls.append((subscription_info, payload))
        if self.error is not None:
            raise self.error
