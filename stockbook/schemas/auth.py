from pydantic import BaseModel, Field, field_validator

from stockbook.core.policy import UserRole
from stockbook.schemas.user import UserOut, coerce_role


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: UserOut


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)
    role: UserRole = UserRole.VIEWER

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("username must not be empty")
        return stripped

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return UserRole.VIEWER
        return coerce_role(value)
