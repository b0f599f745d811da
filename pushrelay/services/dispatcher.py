"""VAPID key loading and Web Push delivery via pywebpush."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import requests
from pywebpush import WebPushException, webpush

if TYPE_CHECKING:
    from pushrelay.core.config import Settings

logger = logging.getLogger(__name__)

# Push service answers meaning the subscription no longer exists.
GONE_STATUS_CODES = frozenset({404, 410})


class PushDeliveryFailed(Exception):
    """Raised when the push service rejects a message or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @property
    def subscription_gone(self) -> bool:
        """True when the endpoint is permanently gone (404/410 or an 'expired' body)."""
        if self.status_code in GONE_STATUS_CODES:
            return True
        return "expired" in (self.body or "").lower()


class PushNotConfiguredError(Exception):
    """Raised when a push is attempted without a VAPID key pair."""


def load_vapid_keys(settings: "Settings") -> tuple[str | None, str | None]:
    """
    Return (public_key, private_key) from settings, falling back to VAPID_KEYS_FILE.

    The keys file may name them PUBLIC_KEY/PRIVATE_KEY or publicKey/privateKey.
    """
    public_key = settings.VAPID_PUBLIC_KEY
    private_key = settings.VAPID_PRIVATE_KEY.get_secret_value() if settings.VAPID_PRIVATE_KEY else None
    if public_key and private_key:
        return public_key, private_key

    path = Path(settings.VAPID_KEYS_FILE)
    try:
        keys = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return public_key, private_key
    except (OSError, ValueError) as e:
        logger.warning("Could not read VAPID keys from %s: %s", path, e)
        return public_key, private_key
    if not isinstance(keys, dict):
        logger.warning("VAPID keys file %s must contain a JSON object", path)
        return public_key, private_key

    public_key = public_key or keys.get("PUBLIC_KEY") or keys.get("publicKey")
    private_key = private_key or keys.get("PRIVATE_KEY") or keys.get("privateKey")
    return public_key, private_key


class PushDispatcher:
    """Delivers one JSON payload to one subscription; constructed once per process."""

    def __init__(
        self,
        public_key: str | None,
        private_key: str | None,
        contact_email: str,
        ttl: int = 60,
        timeout: float = 10.0,
    ) -> None:
        self.public_key = public_key
        self._private_key = private_key
        self.contact_email = contact_email
        self.ttl = ttl
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: "Settings") -> PushDispatcher:
        public_key, private_key = load_vapid_keys(settings)
        dispatcher = cls(
            public_key=public_key,
            private_key=private_key,
            contact_email=settings.VAPID_CONTACT_EMAIL,
            ttl=settings.PUSH_TTL_SECONDS,
            timeout=settings.PUSH_TIMEOUT_SECONDS,
        )
        if dispatcher.enabled:
            logger.info("VAPID keys ready (public=%s…)", public_key[:20])
        else:
            logger.warning("VAPID keys not configured; Web Push disabled")
        return dispatcher

    @property
    def enabled(self) -> bool:
        return bool(self.public_key and self._private_key)

    def send(self, subscription_info: dict[str, Any], payload: dict[str, Any]) -> None:
        """
        Send a single Web Push message.

        Raises PushNotConfiguredError without keys and PushDeliveryFailed when the
        push service rejects the message, is unreachable, or the keys are unusable.
        """
        if not self.enabled:
            raise PushNotConfiguredError("VAPID keys not configured")

        try:
            webpush(
                subscription_info=subscription_info,
                data=json.dumps(payload),
                vapid_private_key=self._private_key,
                # pywebpush adds aud/exp to the claims dict, so pass a fresh one each call
                vapid_claims={"sub": f"mailto:{self.contact_email}"},
                ttl=self.ttl,
                timeout=self.timeout,
            )
        except WebPushException as e:
            response = getattr(e, "response", None)
            status_code = response.status_code if response is not None else None
            body = response.text if response is not None else ""
            raise PushDeliveryFailed(str(e), status_code=status_code, body=body) from e
        except requests.RequestException as e:
            raise PushDeliveryFailed(f"Push service unreachable: {e}") from e
        except (ValueError, TypeError) as e:
            # Undecodable subscription keys or VAPID key (binascii.Error is a ValueError)
            raise PushDeliveryFailed(f"Push message could not be encrypted or signed: {e}") from e
