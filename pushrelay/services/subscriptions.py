"""Push subscription registry: one subscription per user, last write wins."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from pushrelay.models import User
from pushrelay.services.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def find_user(
    db: Session,
    user_id: int | None = None,
    username: str | None = None,
) -> User | None:
    """Look a user up by id, or by username when no id is given."""
    if user_id is not None:
        return db.get(User, user_id)
    if username:
        return db.query(User).filter(User.username == username).first()
    return None


def save_subscription(db: Session, user_id: int, subscription: dict[str, Any]) -> None:
    """Replace the user's stored subscription with the given descriptor."""
    if not subscription or not subscription.get("endpoint"):
        raise InvalidInputError("Subscription with an endpoint is required.")

    updated = (
        db.query(User)
        .filter(User.id == user_id)
        .update({User.subscription: subscription}, synchronize_session=False)
    )
    db.commit()
    if updated == 0:
        raise NotFoundError("User not found.")
    logger.info("Subscription saved for user id=%s endpoint=%s", user_id, subscription["endpoint"][:60])


def clear_subscription(db: Session, user_id: int) -> bool:
    """Set the user's subscription to NULL. Returns True if a row was updated."""
    updated = (
        db.query(User)
        .filter(User.id == user_id)
        .update({User.subscription: None}, synchronize_session=False)
    )
    db.commit()
    return updated > 0


def get_endpoint(subscription: dict[str, Any] | None) -> str:
    """Endpoint URL of a stored subscription, or '' when absent."""
    if not subscription:
        return ""
    endpoint = subscription.get("endpoint")
    return endpoint.strip() if isinstance(endpoint, str) else ""
