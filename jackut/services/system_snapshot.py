"""System Snapshot — whole-system state as plain JSON-safe data.

Invariants:
    - Snapshot covers users, communities, sessions and the core NetworkState
    - system_from_snapshot(system_to_snapshot(x)) restores an equivalent system
    - Missing keys fall back to empty collections (forward-compatible)
    - A snapshot with an unknown version is rejected with SnapshotError

Design Decisions:
    - Plain data only (no pickled objects): the store keeps it in a JSON column
"""

from dataclasses import dataclass

from jackut.core.domain_types import SNAPSHOT_VERSION, CommunityName, UserId
from jackut.core.errors import SnapshotError
from jackut.core.network_snapshot import network_state_from_snapshot, network_state_to_snapshot
from jackut.core.network_state import NetworkState
from jackut.services.community_registry import Community, CommunityRegistry
from jackut.services.session_registry import SessionRegistry
from jackut.services.user_directory import UserAccount, UserDirectory


@dataclass
class SystemParts:
    """The four owned tables that make up a running system."""
    directory: UserDirectory
    communities: CommunityRegistry
    sessions: SessionRegistry
    network: NetworkState


def system_to_snapshot(parts: SystemParts) -> dict:
    """Serialize the whole system. Pure, no IO."""
    return {
        "version": SNAPSHOT_VERSION,
        "users": [
            {
                "login": a.login,
                "password": a.password,
                "name": a.name,
                "attributes": dict(a.attributes),
            }
            for a in parts.directory.accounts()
        ],
        "communities": [
            {
                "name": c.name,
                "owner": c.owner,
                "description": c.description,
                "members": list(c.members),
            }
            for c in parts.communities.all()
        ],
        "sessions": {
            "active": parts.sessions.items(),
            "next_token": parts.sessions.next_token,
        },
        "network": network_state_to_snapshot(parts.network),
    }


def system_from_snapshot(data: dict | None) -> SystemParts:
    """Rebuild every table from a snapshot dict. Pure, no IO."""
    data = data or {}
    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"unsupported snapshot version {version!r}")

    try:
        directory = UserDirectory([
            UserAccount(
                login=UserId(u["login"]), password=u["password"],
                name=u["name"], attributes=dict(u.get("attributes", {})),
            )
            for u in data.get("users", [])
        ])
        communities = CommunityRegistry([
            Community(
                name=CommunityName(c["name"]), owner=UserId(c["owner"]),
                description=c.get("description", ""),
                members=[UserId(m) for m in c.get("members", [])],
            )
            for c in data.get("communities", [])
        ])
    except KeyError as e:
        raise SnapshotError(f"missing field {e}")

    session_data = data.get("sessions", {})
    sessions = SessionRegistry(
        directory,
        sessions=session_data.get("active", {}),
        next_token=session_data.get("next_token", 1),
    )
    network = network_state_from_snapshot(data.get("network"))
    return SystemParts(directory, communities, sessions, network)
