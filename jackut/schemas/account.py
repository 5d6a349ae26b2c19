"""Account Schemas — users, sessions and profile attributes at the API boundary.

Invariants:
    - login and password are stripped and non-empty before reaching the service
    - Attribute keys are non-empty

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Account creation."""
    login: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)
    name: str = Field(default="", max_length=200)

    @field_validator("login")
    @classmethod
    def strip_login(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("login cannot be empty or whitespace")
        return v


class SessionOpen(BaseModel):
    """Login request."""
    login: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SessionResponse(BaseModel):
    token: str
    login: str


class ProfileEdit(BaseModel):
    """Single attribute write on the caller's profile."""
    attribute: str = Field(min_length=1, max_length=64)
    value: str = Field(max_length=2000)


class AttributeResponse(BaseModel):
    login: str
    attribute: str
    value: str
