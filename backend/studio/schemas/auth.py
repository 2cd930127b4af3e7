from pydantic import BaseModel, Field, field_validator
from ..models.user import Role
from .common import CamelModel


class LoginIn(BaseModel):
    # omitted -> the bootstrap admin account
    username: str | None = None
    password: str = Field(min_length=1)


class UserOut(CamelModel):
    id: int
    username: str
    role: Role
    # the client reads isAdmin as the string "true" / "false"
    is_admin: str

    @field_validator("is_admin", mode="before")
    @classmethod
    def _flag_as_string(cls, v):
        if isinstance(v, bool):
            return "true" if v else "false"
        return v
