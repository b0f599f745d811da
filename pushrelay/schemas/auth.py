"""Request/response schemas for registration, login and user listing."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """New account details."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str = Field(..., min_length=1, max_length=320, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RegisterResponse(BaseModel):
    """Returned after a successful registration."""

    message: str = "User registered"
    id: int = Field(..., description="ID of the created user")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """Session token and profile returned after login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT session token; send as 'Authorization: Bearer <token>'")
    username: str
    email: str
    role: str


class CurrentUser(BaseModel):
    """Identity recovered from a verified session token."""

    id: int
    username: str
    role: str


class UserListItem(BaseModel):
    """User entry for admin list (no password, no subscription)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str
