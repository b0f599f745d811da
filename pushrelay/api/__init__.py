"""API routes."""

from fastapi import APIRouter

from pushrelay.api import auth, health, push

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(push.router, tags=["push"])
