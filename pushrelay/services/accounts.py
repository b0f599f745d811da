"""Registration, login and bootstrap of the administrator account."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pushrelay.core.security import create_access_token, hash_password, verify_password
from pushrelay.models import ROLE_ADMIN, ROLE_USER, User
from pushrelay.services.errors import ConflictError, InvalidInputError, UnauthorizedError

if TYPE_CHECKING:
    from pushrelay.core.config import Settings

logger = logging.getLogger(__name__)

# Same message for unknown user and wrong password so usernames cannot be enumerated.
INVALID_CREDENTIALS = "Invalid username or password."


def role_for_username(username: str, settings: "Settings") -> str:
    """Only the reserved bootstrap username is created as admin."""
    return ROLE_ADMIN if username == settings.BOOTSTRAP_ADMIN_USERNAME else ROLE_USER


def register_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    settings: "Settings",
) -> User:
    """
    Create a user with a bcrypt-hashed password and no subscription.

    Raises InvalidInputError on empty fields and ConflictError when the username
    or email is already registered.
    """
    username = (username or "").strip()
    email = (email or "").strip()
    if not username or not email or not password:
        raise InvalidInputError("Username, email and password are required.")

    exists = (
        db.query(User.id)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if exists is not None:
        raise ConflictError("Username or email already registered.")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password, rounds=settings.BCRYPT_ROUNDS),
        role=role_for_username(username, settings),
        subscription=None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race against a concurrent registration; the unique index decides.
        db.rollback()
        raise ConflictError("Username or email already registered.") from e
    db.refresh(user)
    logger.info("Registered user id=%s username=%s role=%s", user.id, user.username, user.role)
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user when the password matches its stored hash; raise UnauthorizedError otherwise."""
    username = (username or "").strip()
    if not username or not password:
        raise InvalidInputError("Username and password are required.")

    user = db.query(User).filter(User.username == username).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for username=%s", username)
        raise UnauthorizedError(INVALID_CREDENTIALS)
    return user


def issue_session_token(user: User) -> str:
    """Sign a session token for the user's current id, username and role."""
    return create_access_token(
        user_id=user.id,
        username=user.username,
        role=user.role or ROLE_USER,
    )


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def ensure_bootstrap_admin(db: Session, settings: "Settings") -> bool:
    """
    Create the bootstrap administrator if it does not exist yet.

    Returns True when the account was created. Idempotent: safe to run at every startup.
    """
    username = settings.BOOTSTRAP_ADMIN_USERNAME
    existing = db.query(User.id).filter(User.username == username).first()
    if existing is not None:
        return False

    admin = User(
        username=username,
        email=settings.BOOTSTRAP_ADMIN_EMAIL,
        password_hash=hash_password(
            settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(),
            rounds=settings.BCRYPT_ROUNDS,
        ),
        role=ROLE_ADMIN,
        subscription=None,
    )
    db.add(admin)
    db.commit()
    logger.info("Bootstrap admin '%s' created", username)
    return True


def set_password(db: Session, username: str, password: str, settings: "Settings") -> bool:
    """Store a new bcrypt hash for an existing user. Returns False if the user does not exist."""
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        return False
    user.password_hash = hash_password(password, rounds=settings.BCRYPT_ROUNDS)
    db.commit()
    logger.info("Password updated for username=%s", username)
    return True
