"""Core app configuration, database and security."""

from pushrelay.core.config import get_settings, settings
from pushrelay.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
