"""Network State — the explicitly owned in-memory state of the social graph.

Invariants:
    - One MemberState per user id: it owns that user's RelationshipRecord and Inbox
    - Cross-user relations are ids looked up in NetworkState.members, never object references
    - Relation lists are ordered and never hold duplicates or the owner's own id
    - Messages are immutable; an Inbox is FIFO and mixes message kinds

Design Decisions:
    - Lists instead of sets: display order is insertion order (friends list, crushes)
    - State object passed into RelationshipGraph and MessagingEngine constructors,
      no module-level repository
"""

from dataclasses import dataclass, field
from typing import Callable, Iterator

from jackut.core.domain_types import MessageKind, RelationKind, UserId


@dataclass
class RelationshipRecord:
    """Outgoing relations of one user — pure dataclass, no IO."""

    friends: list[UserId] = field(default_factory=list)
    # Users who invited this user and are still waiting for an answer
    pending_invites: list[UserId] = field(default_factory=list)
    # Users this user is a fan of
    idols: list[UserId] = field(default_factory=list)
    crushes: list[UserId] = field(default_factory=list)
    enemies: list[UserId] = field(default_factory=list)

    def relation(self, kind: RelationKind) -> list[UserId]:
        return getattr(self, kind.value)

    def holds(self, kind: RelationKind, other: UserId) -> bool:
        return other in self.relation(kind)

    def add(self, kind: RelationKind, other: UserId) -> None:
        ids = self.relation(kind)
        if other not in ids:
            ids.append(other)

    def discard(self, kind: RelationKind, other: UserId) -> None:
        ids = self.relation(kind)
        if other in ids:
            ids.remove(other)

    def discard_everywhere(self, other: UserId) -> None:
        """Drop `other` from every relation list."""
        for kind in RelationKind:
            self.discard(kind, other)


@dataclass(frozen=True)
class Message:
    """One inbox entry. `recipient` is a user id or a community name."""

    sender: UserId
    recipient: str
    content: str
    kind: MessageKind

    def render(self) -> str:
        """Direct messages read as 'sender: content', community ones as raw content."""
        if self.kind == MessageKind.DIRECT:
            return f"{self.sender}: {self.content}"
        return self.content


class Inbox:
    """Ordered message queue with pop-front-matching-predicate reads."""

    def __init__(self, messages: list[Message] | None = None):
        self._messages: list[Message] = list(messages or [])

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def count(self, kind: MessageKind) -> int:
        return sum(1 for m in self._messages if m.kind == kind)

    def pop_first(self, predicate: Callable[[Message], bool]) -> Message | None:
        """Remove and return the oldest matching message; others keep their order."""
        for index, message in enumerate(self._messages):
            if predicate(message):
                return self._messages.pop(index)
        return None

    def remove_where(self, predicate: Callable[[Message], bool]) -> int:
        """Drop every matching message. Returns how many were removed."""
        kept = [m for m in self._messages if not predicate(m)]
        removed = len(self._messages) - len(kept)
        self._messages = kept
        return removed

    def clear(self) -> None:
        self._messages = []


@dataclass
class MemberState:
    """Everything the core owns for one user: relations and inbox."""

    relations: RelationshipRecord = field(default_factory=RelationshipRecord)
    inbox: Inbox = field(default_factory=Inbox)


@dataclass
class NetworkState:
    """User-keyed table of MemberState — shared by graph and messaging engine."""

    members: dict[UserId, MemberState] = field(default_factory=dict)

    def member(self, user_id: UserId) -> MemberState:
        """Get the user's state, creating an empty one on first touch."""
        state = self.members.get(user_id)
        if state is None:
            state = MemberState()
            self.members[user_id] = state
        return state

    def relations_of(self, user_id: UserId) -> RelationshipRecord:
        return self.member(user_id).relations

    def peek_relations(self, user_id: UserId) -> RelationshipRecord:
        """Read-only view: an unknown id yields an empty record that is not stored."""
        state = self.members.get(user_id)
        return state.relations if state is not None else RelationshipRecord()

    def inbox_of(self, user_id: UserId) -> Inbox:
        return self.member(user_id).inbox

    def clear(self) -> None:
        self.members.clear()
