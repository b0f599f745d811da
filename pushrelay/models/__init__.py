"""SQLAlchemy ORM models."""

from pushrelay.models.base import Base
from pushrelay.models.user import ROLE_ADMIN, ROLE_USER, User

__all__ = ["Base", "ROLE_ADMIN", "ROLE_USER", "User"]
