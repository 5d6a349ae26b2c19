"""Messaging Schemas — direct messages, community broadcasts and communities.

Invariants:
    - Message content is non-empty and bounded
    - Community names are stripped and non-empty
"""

from pydantic import BaseModel, Field, field_validator


class DirectMessageCreate(BaseModel):
    recipient: str = Field(min_length=1)
    content: str = Field(min_length=1, max_length=5000)


class CommunityMessageCreate(BaseModel):
    community: str = Field(min_length=1)
    content: str = Field(min_length=1, max_length=5000)


class MessageRead(BaseModel):
    message: str


class DeliveryResult(BaseModel):
    community: str
    delivered: int


class CommunityCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("community name cannot be empty or whitespace")
        return v


class CommunityResponse(BaseModel):
    name: str
    owner: str
    description: str
    members: list[str]
