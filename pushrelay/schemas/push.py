"""Request/response schemas for push subscriptions and sending."""

import base64
import binascii
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Alphabet of base64url (as sent by browsers) plus standard base64 for lenient clients.
_B64_RE = re.compile(r"^[A-Za-z0-9_\-+/]+={0,2}$")

# Uncompressed P-256 public point and the 16-byte auth secret (RFC 8291).
P256DH_KEY_BYTES = 65
AUTH_SECRET_BYTES = 16


def _decode_b64url(value: str) -> bytes:
    if not _B64_RE.match(value):
        raise ValueError("must be base64url encoded")
    s = value.rstrip("=").replace("+", "-").replace("/", "_")
    try:
        return base64.urlsafe_b64decode(s + "=" * (-len(s) % 4))
    except (binascii.Error, ValueError) as e:
        raise ValueError("must be base64url encoded") from e


class SubscriptionKeys(BaseModel):
    """Encryption keys of a browser PushSubscription."""

    model_config = ConfigDict(extra="allow")

    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)

    @field_validator("p256dh")
    @classmethod
    def validate_p256dh(cls, v: str) -> str:
        v = v.strip()
        if len(_decode_b64url(v)) != P256DH_KEY_BYTES:
            raise ValueError(f"p256dh must decode to {P256DH_KEY_BYTES} bytes")
        return v

    @field_validator("auth")
    @classmethod
    def validate_auth(cls, v: str) -> str:
        v = v.strip()
        if len(_decode_b64url(v)) != AUTH_SECRET_BYTES:
            raise ValueError(f"auth must decode to {AUTH_SECRET_BYTES} bytes")
        return v


class PushSubscriptionInfo(BaseModel):
    """
    Browser PushSubscription as produced by PushSubscription.toJSON().

    Extra fields are kept so the descriptor is stored as the browser sent it.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    endpoint: str = Field(..., min_length=1, description="Push service endpoint URL")
    expiration_time: float | None = Field(default=None, alias="expirationTime")
    keys: SubscriptionKeys | None = None

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        s = v.strip()
        if not (s.lower().startswith("https://") or s.lower().startswith("http://")):
            raise ValueError("endpoint must be an http or https URL")
        return s


class SubscribeRequest(BaseModel):
    """Body of POST /subscribe. username/user_id are only read on the legacy unauthenticated path."""

    subscription: PushSubscriptionInfo
    username: str | None = None
    user_id: int | None = None


class SendPushRequest(BaseModel):
    """Body of POST /send-push/{id}."""

    title: str | None = Field(default=None, max_length=255)
    body: str | None = Field(default=None, max_length=4000)


class SendPushToUserRequest(BaseModel):
    """Body of POST /send-push-to-user (target by username)."""

    target_username: str = Field(..., min_length=1, max_length=255)
    title: str | None = Field(default=None, max_length=255)
    message: str | None = Field(default=None, max_length=4000)


class PushPayload(BaseModel):
    """JSON delivered to the service worker."""

    title: str
    message: str
    icon: str


class MessageResponse(BaseModel):
    """Generic acknowledgement."""

    message: str


class VapidPublicKeyResponse(BaseModel):
    """Application server key the frontend passes to pushManager.subscribe()."""

    public_key: str
