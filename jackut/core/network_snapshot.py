"""Network Snapshot — serialization / deserialization for NetworkState.

Invariants:
    - network_state_to_snapshot produces a JSON-safe dict (no Enums, no dataclasses)
    - network_state_from_snapshot rebuilds relation order and inbox order exactly
    - Missing keys fall back to empty state (forward-compatible)

Design Decisions:
    - Extracted from network_state.py: state stays a plain dataclass
    - Messages stored per inbox, so a fanned-out community message becomes
      independent copies after restore (they are immutable, nothing observes identity)
"""

from jackut.core.domain_types import MessageKind, RelationKind, UserId
from jackut.core.errors import SnapshotError
from jackut.core.network_state import Inbox, MemberState, Message, NetworkState, RelationshipRecord


def _message_to_dict(message: Message) -> dict:
    return {
        "sender": message.sender,
        "recipient": message.recipient,
        "content": message.content,
        "kind": message.kind.value,
    }


def _message_from_dict(data: dict) -> Message:
    try:
        return Message(
            sender=UserId(data["sender"]),
            recipient=data["recipient"],
            content=data["content"],
            kind=MessageKind(data["kind"]),
        )
    except (KeyError, ValueError) as e:
        raise SnapshotError(f"malformed message {data!r}: {e}")


def network_state_to_snapshot(state: NetworkState) -> dict:
    """Serialize NetworkState to JSON-safe dict. Pure, no IO."""
    return {
        "members": {
            user_id: {
                "relations": {
                    kind.value: list(member.relations.relation(kind))
                    for kind in RelationKind
                },
                "inbox": [_message_to_dict(m) for m in member.inbox],
            }
            for user_id, member in state.members.items()
        },
    }


def network_state_from_snapshot(data: dict | None) -> NetworkState:
    """Reconstruct NetworkState from snapshot dict. Pure, no IO."""
    state = NetworkState()
    if not data:
        return state

    for user_id, member_data in data.get("members", {}).items():
        relations_data = member_data.get("relations", {})
        relations = RelationshipRecord(**{
            kind.value: [UserId(u) for u in relations_data.get(kind.value, [])]
            for kind in RelationKind
        })
        inbox = Inbox([_message_from_dict(m) for m in member_data.get("inbox", [])])
        state.members[UserId(user_id)] = MemberState(relations=relations, inbox=inbox)

    return state
