"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is the login; CommunityName is the community's unique name
    - Message kinds and relation kinds encoded as Enums — no raw string matching
    - Reserved profile keys are never stored in the attribute map

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (snapshots are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
CommunityName = NewType("CommunityName", str)
SessionToken = NewType("SessionToken", str)


# ─── Enums ───────────────────────────────────────────────────────

class MessageKind(str, Enum):
    """Inbox entry kinds. Reads filter by kind."""
    DIRECT = "direct"
    COMMUNITY = "community"


class RelationKind(str, Enum):
    """Outgoing relation sets held by every RelationshipRecord."""
    FRIEND = "friends"
    PENDING_INVITE = "pending_invites"
    IDOL = "idols"
    CRUSH = "crushes"
    ENEMY = "enemies"


# ─── Constants ───────────────────────────────────────────────────

SYSTEM_SENDER = UserId("jackut")

# Profile keys resolved from the account itself, read-only
ATTRIBUTE_NAME = "nome"
ATTRIBUTE_LOGIN = "login"
RESERVED_ATTRIBUTES = frozenset({ATTRIBUTE_NAME, ATTRIBUTE_LOGIN})

CRUSH_NOTICE_TEMPLATE = "{name} é seu paquera - Recado do Jackut."

SNAPSHOT_VERSION = 1
