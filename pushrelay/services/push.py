"""Send a push notification to one user and react to expired subscriptions."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from pushrelay.models import User
from pushrelay.schemas.push import PushPayload
from pushrelay.services.dispatcher import PushDeliveryFailed, PushDispatcher, PushNotConfiguredError
from pushrelay.services.errors import DeliveryError, GoneError, NotFoundError
from pushrelay.services.subscriptions import clear_subscription, get_endpoint

if TYPE_CHECKING:
    from pushrelay.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Notification"


def build_payload(
    username: str,
    title: str | None,
    message: str | None,
    settings: "Settings",
) -> PushPayload:
    """Payload with defaults for missing title/message."""
    return PushPayload(
        title=title or DEFAULT_TITLE,
        message=message or f"Hello {username}, you have a notification",
        icon=settings.PUSH_ICON,
    )


def send_push_to_user(
    db: Session,
    dispatcher: PushDispatcher,
    user: User | None,
    title: str | None,
    message: str | None,
    settings: "Settings",
) -> None:
    """
    Deliver one notification to the user's stored subscription.

    Raises NotFoundError when the user or its subscription is missing (no delivery
    attempted), GoneError after clearing a subscription the push service reports
    as expired, and DeliveryError for any other failure. Never retries.
    """
    if user is None or not get_endpoint(user.subscription):
        raise NotFoundError("Target user is not subscribed.")

    user_id = user.id
    payload = build_payload(user.username, title, message, settings)
    try:
        dispatcher.send(user.subscription, payload.model_dump())
    except PushNotConfiguredError as e:
        raise DeliveryError("Push notifications are not configured.") from e
    except PushDeliveryFailed as e:
        if e.subscription_gone:
            clear_subscription(db, user_id)
            logger.info(
                "Push subscription gone (status=%s), cleared for user id=%s",
                e.status_code,
                user_id,
            )
            raise GoneError("Subscription expired and removed.") from e
        logger.warning("Push delivery failed for user id=%s: %s", user_id, e.message)
        raise DeliveryError("Error sending notification.") from e

    logger.info("Push sent to user id=%s", user_id)
