"""Request/response schemas for auth endpoints and the decoded session payload."""

from pydantic import BaseModel, ConfigDict, Field

from brainfeed.schemas.base import CamelModel


class SessionData(BaseModel):
    """Identity carried inside a signed session token."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    username: str
    role: str


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class UserOut(CamelModel):
    """Public view of a user account (no password)."""

    id: int
    username: str
    name: str
    role: str


class LoginResponse(BaseModel):
    """Body returned after a successful login; the session itself travels in a cookie."""

    user: UserOut
    message: str = "Login successful"


class MessageResponse(BaseModel):
    message: str
