"""Push subscription and send endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from pushrelay.api.auth import get_current_user, require_admin, security
from pushrelay.core.config import Settings, get_settings
from pushrelay.core.database import get_db
from pushrelay.schemas.auth import CurrentUser
from pushrelay.schemas.push import (
    MessageResponse,
    SendPushRequest,
    SendPushToUserRequest,
    SubscribeRequest,
    VapidPublicKeyResponse,
)
from pushrelay.services.dispatcher import PushDispatcher
from pushrelay.services.errors import InvalidInputError, NotFoundError
from pushrelay.services.push import send_push_to_user
from pushrelay.services.subscriptions import find_user, save_subscription

router = APIRouter()


def get_dispatcher(request: Request) -> PushDispatcher:
    """Dependency: the process-wide dispatcher created at startup."""
    return request.app.state.dispatcher


@router.get("/vapid-public-key", response_model=VapidPublicKeyResponse)
def get_vapid_public_key(
    dispatcher: Annotated[PushDispatcher, Depends(get_dispatcher)],
) -> VapidPublicKeyResponse:
    """Public key the frontend needs to create a subscription."""
    if not dispatcher.enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Push notifications are not configured.",
        )
    return VapidPublicKeyResponse(public_key=dispatcher.public_key)


def get_subscriber(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser | None:
    """
    Dependency: identity of the caller of POST /subscribe.

    Resolved before the body is validated, so a missing or bad token is a 401 even
    for malformed bodies. Returns None only on the legacy path (no token and
    LEGACY_SUBSCRIBE_ENABLED), where the body names the user.
    """
    if credentials is None and settings.LEGACY_SUBSCRIBE_ENABLED:
        return None
    return get_current_user(credentials)


@router.post("/subscribe", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def subscribe(
    body: SubscribeRequest,
    subscriber: Annotated[CurrentUser | None, Depends(get_subscriber)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Store the browser subscription for the caller, replacing any previous one."""
    if subscriber is not None:
        user_id = subscriber.id
    else:
        if body.user_id is None and not body.username:
            raise InvalidInputError("username or user_id is required.")
        user = find_user(db, user_id=body.user_id, username=body.username)
        if user is None:
            raise NotFoundError("User not found.")
        user_id = user.id

    save_subscription(
        db,
        user_id,
        body.subscription.model_dump(by_alias=True, exclude_none=True),
    )
    return MessageResponse(message="Subscription saved")


@router.post("/send-push/{user_id}", response_model=MessageResponse)
def send_push(
    user_id: int,
    body: SendPushRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    dispatcher: Annotated[PushDispatcher, Depends(get_dispatcher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Send a notification to a user by id (admin only)."""
    target = find_user(db, user_id=user_id)
    send_push_to_user(db, dispatcher, target, body.title, body.body, settings)
    return MessageResponse(message="Push sent")


@router.post("/send-push-to-user", response_model=MessageResponse)
def send_push_by_username(
    body: SendPushToUserRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    dispatcher: Annotated[PushDispatcher, Depends(get_dispatcher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Send a notification to a user by username (admin only; compatibility route)."""
    target = find_user(db, username=body.target_username)
    send_push_to_user(db, dispatcher, target, body.title, body.message, settings)
    return MessageResponse(message="Push sent")
