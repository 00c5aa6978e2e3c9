from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from .base import CamelModel, upper_enum_value


class UserRole(str, Enum):
    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"


class User(CamelModel):
    id: str
    employee_id: str
    name: str
    department: Optional[str] = None
    role: UserRole = UserRole.EMPLOYEE
    is_active: bool = True
    email: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def _normalise_role(cls, value):
        return upper_enum_value(value)


class LoginRequest(CamelModel):
    employee_id: str
    password: str


class LoginResult(CamelModel):
    user: User
    # older servers answer with "token", current ones with "accessToken"
    token: str = Field(validation_alias=AliasChoices("accessToken", "token"))
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None
