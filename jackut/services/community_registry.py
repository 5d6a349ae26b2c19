"""Community Registry — community existence, ownership and member lists.

Invariants:
    - Community names are unique; the owner is always the first member
    - Member lists are ordered by join time and hold no duplicates
    - The owner cannot leave; owned communities disappear with the owner
    - remove_user never raises
"""

from dataclasses import dataclass, field

from jackut.core.domain_types import CommunityName, UserId
from jackut.core.errors import (
    AlreadyMemberError,
    DuplicateCommunityError,
    ErrorContext,
    InvalidUserDataError,
    NotMemberError,
    UnknownCommunityError,
)


@dataclass
class Community:
    name: CommunityName
    owner: UserId
    description: str
    members: list[UserId] = field(default_factory=list)


class CommunityRegistry:
    """Named communities keyed by name, in creation order."""

    def __init__(self, communities: list[Community] | None = None):
        self._communities: dict[CommunityName, Community] = {
            c.name: c for c in communities or []
        }

    def create(self, owner: UserId, name: str, description: str) -> Community:
        if name in self._communities:
            raise DuplicateCommunityError(name, ErrorContext(user_id=owner, target_id=name))
        community = Community(
            name=CommunityName(name), owner=owner,
            description=description, members=[owner],
        )
        self._communities[community.name] = community
        return community

    def exists(self, name: str) -> bool:
        return name in self._communities

    def get(self, name: str) -> Community:
        community = self._communities.get(CommunityName(name))
        if community is None:
            raise UnknownCommunityError(name, ErrorContext(target_id=name))
        return community

    def description(self, name: str) -> str:
        return self.get(name).description

    def owner(self, name: str) -> UserId:
        return self.get(name).owner

    def members(self, name: str) -> list[UserId]:
        return list(self.get(name).members)

    def communities_of(self, login: str) -> list[CommunityName]:
        return [c.name for c in self._communities.values() if login in c.members]

    def all(self) -> list[Community]:
        return list(self._communities.values())

    def join(self, login: UserId, name: str) -> None:
        community = self.get(name)
        if login in community.members:
            raise AlreadyMemberError(name, ErrorContext(user_id=login, target_id=name))
        community.members.append(login)

    def leave(self, login: UserId, name: str) -> None:
        community = self.get(name)
        ctx = ErrorContext(user_id=login, target_id=name)
        if login not in community.members:
            raise NotMemberError(name, ctx)
        if community.owner == login:
            raise InvalidUserDataError(
                "The owner cannot leave their own community.", "community", ctx,
            )
        community.members.remove(login)

    def remove_user(self, login: UserId) -> list[CommunityName]:
        """Delete owned communities and drop the user from the rest.

        Returns the names of the deleted communities.
        """
        owned = [n for n, c in self._communities.items() if c.owner == login]
        for name in owned:
            del self._communities[name]
        for community in self._communities.values():
            if login in community.members:
                community.members.remove(login)
        return owned

    def reset(self) -> None:
        self._communities.clear()
