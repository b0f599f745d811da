"""ORM model for application users (auth, RBAC and push subscription)."""

from sqlalchemy import JSON, Column, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

from pushrelay.models.base import Base

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class User(Base):
    """
    User account for JWT authentication, role-based access control and Web Push.

    role: 'admin' or 'user'; fixed at creation.
    subscription: browser PushSubscription JSON ({endpoint, keys: {p256dh, auth}}) or NULL.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    subscription = Column(
        JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"),
        nullable=True,
    )
