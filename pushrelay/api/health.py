"""GET /health: store reachability and whether Web Push can be sent."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pushrelay.api.push import get_dispatcher
from pushrelay.core.config import Settings, get_settings
from pushrelay.core.database import get_db, ping
from pushrelay.schemas.health import HealthResponse
from pushrelay.services.dispatcher import PushDispatcher

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    dispatcher: Annotated[PushDispatcher, Depends(get_dispatcher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if ping(db) else "disconnected",
        push_enabled=dispatcher.enabled,
    )
