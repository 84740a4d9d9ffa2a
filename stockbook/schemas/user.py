from pydantic import BaseModel, Field, field_validator

from stockbook.core.policy import UserRole


def coerce_role(value):
    if isinstance(value, UserRole) or not isinstance(value, str):
        return value
    normalized = value.strip().lower().replace("_", " ").replace("-", " ")
    for role in UserRole:
        if role.value.lower() == normalized:
            return role
    return value


class UserOut(BaseModel):
    id: int
    username: str
    role: UserRole

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)
    role: UserRole

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        return coerce_role(value)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("username must not be empty")
        return stripped


class UserUpdate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    role: UserRole
    password: str | None = Field(default=None, max_length=128)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        return coerce_role(value)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("username must not be empty")
        return stripped

    @field_validator("password", mode="before")
    @classmethod
    def blank_password_means_unchanged(cls, value):
        if isinstance(value, str) and not value:
            return None
        return value
