"""User and authentication schema definitions."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, constr

from surveygenie.schemas.base import BaseSchema


PasswordStr = constr(min_length=5, max_length=128)
EmailLike = constr(pattern=r"[^@\s]+@[^@\s]+\.[^@\s]+", min_length=5, max_length=255)
NameStr = constr(min_length=1, max_length=100)


class RegisterRequest(BaseModel):
    """Payload for creating a new user account."""

    email: EmailLike
    password: PasswordStr
    first_name: NameStr
    last_name: NameStr


class LoginRequest(BaseModel):
    """Login payload."""

    email: EmailLike
    password: PasswordStr


class UserUpdate(BaseModel):
    """Partial user update payload."""

    model_config = ConfigDict(extra="forbid")

    email: Optional[EmailLike] = None
    first_name: Optional[NameStr] = None
    last_name: Optional[NameStr] = None


class UserRecord(BaseSchema):
    id: int
    email: str
    first_name: str
    last_name: str
    survey_count: int


class TokenResponse(BaseSchema):
    token: str


class UserResponse(BaseSchema):
    user: UserRecord


class UserCreatedResponse(BaseSchema):
    user: UserRecord
    token: str


class UserListResponse(BaseSchema):
    users: list[UserRecord]


class UserDeletedResponse(BaseSchema):
    deleted_user: int
