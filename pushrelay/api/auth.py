"""Registration, JWT login and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pushrelay.core.config import Settings, get_settings
from pushrelay.core.database import get_db
from pushrelay.core.security import decode_access_token
from pushrelay.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserListItem,
)
from pushrelay.services.accounts import (
    authenticate,
    issue_session_token,
    list_users,
    register_user,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RegisterResponse:
    """Create an account. The reserved bootstrap username is created as admin."""
    user = register_user(db, body.username, body.email, body.password, settings)
    return RegisterResponse(id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate(db, body.username, body.password)
    return LoginResponse(
        token=issue_session_token(user),
        username=user.username,
        email=user.email,
        role=user.role,
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.
    Stateless; raises 401 if the header is missing, malformed, forged or expired.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        return CurrentUser(
            id=int(payload["sub"]),
            username=str(payload["username"]),
            role=str(payload["role"]),
        )
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token payload")


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


@router.get("/users", response_model=list[UserListItem])
def get_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserListItem]:
    """List all users without password or subscription (admin only)."""
    return [UserListItem.model_validate(u) for u in list_users(db)]
