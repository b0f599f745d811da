"""Pydantic request/response schemas."""

from pushrelay.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserListItem,
)
from pushrelay.schemas.health import HealthResponse
from pushrelay.schemas.push import (
    MessageResponse,
    PushPayload,
    PushSubscriptionInfo,
    SendPushRequest,
    SendPushToUserRequest,
    SubscribeRequest,
    SubscriptionKeys,
    VapidPublicKeyResponse,
)

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PushPayload",
    "PushSubscriptionInfo",
    "RegisterRequest",
    "RegisterResponse",
    "SendPushRequest",
    "SendPushToUserRequest",
    "SubscribeRequest",
    "SubscriptionKeys",
    "UserListItem",
    "VapidPublicKeyResponse",
]
