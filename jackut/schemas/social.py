"""Social Schemas — relation queries and mutation results."""

from pydantic import BaseModel


class IdList(BaseModel):
    """Ordered list of user ids or community names."""
    items: list[str]


class RelationCheck(BaseModel):
    login: str
    target: str
    relation: str
    holds: bool


class FriendRequestResult(BaseModel):
    target: str
    # True when this call accepted a pending invite
    friends: bool


class CrushResult(BaseModel):
    target: str
    mutual: bool
