from datetime import datetime

from pydantic import BaseModel, Field

from app.models.user import Role


class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: str | None = None  # only "admin" is honoured, anything else means "user"

    @property
    def resolved_role(self) -> Role:
        return Role.ADMIN if self.role == Role.ADMIN.value else Role.USER


class UserRead(BaseModel):
    username: str
    role: Role
    joined: datetime | None

    model_config = {"from_attributes": True}


class ProfileRead(BaseModel):
    username: str
    role: Role
    joined: str  # ISO-8601, or "N/A" for the seeded admin


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str
    username: str
    role: Role


class TokenIdentity(BaseModel):
    username: str
    role: Role


class MessageResponse(BaseModel):
    message: str
