"""Jackut Service — request dispatch between session tokens and the core engines.

Invariants:
    - Every public operation runs inside one coarse re-entrant lock, so
      cross-user mutations (invite acceptance, crush notices, cascades) apply
      as one logical transaction
    - Session tokens are resolved here; the core only ever sees user ids
    - remove_user cascades through graph, inboxes, communities, sessions and directory
    - Failed operations leave state unchanged (core checks precede mutation)

Design Decisions:
    - One owned SystemParts bundle per service instance, no module-level state
    - RLock over asyncio.Lock: routes are sync and run in FastAPI's threadpool
"""

import functools
import logging
import threading

from jackut.core.domain_types import SYSTEM_SENDER, CommunityName, SessionToken, UserId
from jackut.core.errors import JackutError
from jackut.core.messaging_engine import MessagingEngine
from jackut.core.network_state import NetworkState
from jackut.core.relationship_graph import RelationshipGraph
from jackut.services.community_registry import CommunityRegistry
from jackut.services.session_registry import SessionRegistry
from jackut.services.system_snapshot import (
    SystemParts,
    system_from_snapshot,
    system_to_snapshot,
)
from jackut.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)


def _synchronized(method):
    """Run the wrapped method while holding the service lock."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


def _empty_parts() -> SystemParts:
    directory = UserDirectory()
    return SystemParts(
        directory=directory,
        communities=CommunityRegistry(),
        sessions=SessionRegistry(directory),
        network=NetworkState(),
    )


class JackutService:
    """Facade used by the HTTP routes."""

    def __init__(
        self, parts: SystemParts | None = None, system_sender: str = SYSTEM_SENDER,
    ):
        self._lock = threading.RLock()
        self._system_sender = UserId(system_sender)
        self._wire(parts or _empty_parts())

    @classmethod
    def from_snapshot(
        cls, data: dict | None, system_sender: str = SYSTEM_SENDER,
    ) -> "JackutService":
        return cls(system_from_snapshot(data), system_sender=system_sender)

    def _wire(self, parts: SystemParts) -> None:
        self._parts = parts
        self.directory = parts.directory
        self.communities = parts.communities
        self.sessions = parts.sessions
        self.network = parts.network
        self.messaging = MessagingEngine(
            parts.network, parts.directory, parts.communities,
            system_sender=self._system_sender,
        )
        self.graph = RelationshipGraph(parts.network, parts.directory, self.messaging)

    # --- System ------------------------------------------------------------------

    @_synchronized
    def snapshot(self) -> dict:
        return system_to_snapshot(self._parts)

    @_synchronized
    def stats(self) -> dict[str, int]:
        return {
            "users": len(self.directory.logins()),
            "communities": len(self.communities.all()),
            "sessions": len(self.sessions.items()),
        }

    @_synchronized
    def restore(self, data: dict | None) -> None:
        """Replace the whole state with a snapshot; nothing changes if it is invalid."""
        self._wire(system_from_snapshot(data))

    @_synchronized
    def reset(self) -> None:
        self.graph.reset()
        self.messaging.reset()
        self.network.clear()
        self.communities.reset()
        self.sessions.reset()
        self.directory.reset()
        logger.info("System reset")

    # --- Accounts and sessions ---------------------------------------------------

    @_synchronized
    def create_user(self, login: str, password: str, name: str) -> None:
        account = self.directory.create_user(
            login, password, name, reserved_login=self._system_sender,
        )
        self.graph.register_user(account.login)
        logger.info("User created", extra={"user_id": account.login})

    @_synchronized
    def open_session(self, login: str, password: str) -> SessionToken:
        return self.sessions.open_session(login, password)

    @_synchronized
    def close_session(self, token: str) -> bool:
        return self.sessions.close_session(token)

    @_synchronized
    def session_exists(self, token: str) -> bool:
        return self.sessions.exists(token)

    @_synchronized
    def login_of_session(self, token: str) -> UserId:
        return self.sessions.resolve(token)

    @_synchronized
    def get_user_attribute(self, login: str, attribute: str) -> str:
        return self.directory.get_attribute(login, attribute)

    @_synchronized
    def edit_profile(self, token: str, attribute: str, value: str) -> None:
        login = self.sessions.resolve(token)
        self.directory.edit_profile(login, attribute, value)

    @_synchronized
    def remove_user(self, token: str) -> None:
        login = self.sessions.resolve(token)
        self.graph.remove_user(login)
        self.messaging.purge_user(login)
        dropped = self.communities.remove_user(login)
        self.sessions.close_user_sessions(login)
        self.directory.remove(login)
        logger.info(
            f"User removed, {len(dropped)} owned communities deleted",
            extra={"user_id": login},
        )

    # --- Friends -----------------------------------------------------------------

    @_synchronized
    def is_friend(self, token: str, friend: str) -> bool:
        try:
            login = self.sessions.resolve(token)
        except JackutError:
            return False
        return self.graph.is_friend(login, UserId(friend))

    @_synchronized
    def request_friend(self, token: str, friend: str) -> bool:
        login = self.sessions.resolve(token)
        formed = self.graph.request_friend(login, UserId(friend))
        if formed:
            logger.info("Friendship formed", extra={"user_id": login, "target_id": friend})
        return formed

    @_synchronized
    def list_friends(self, token: str) -> list[UserId]:
        return self.graph.list_friends(self.sessions.resolve(token))

    @_synchronized
    def list_pending_invites(self, token: str) -> list[UserId]:
        return self.graph.list_pending_invites(self.sessions.resolve(token))

    # --- Fans / crushes / enemies ------------------------------------------------

    @_synchronized
    def is_fan(self, login: str, idol: str) -> bool:
        return self.graph.is_fan(UserId(login), UserId(idol))

    @_synchronized
    def add_fan(self, token: str, idol: str) -> None:
        self.graph.add_fan(self.sessions.resolve(token), UserId(idol))

    @_synchronized
    def list_fans(self, login: str) -> list[UserId]:
        return self.graph.list_fans(UserId(login))

    @_synchronized
    def list_idols(self, login: str) -> list[UserId]:
        return self.graph.list_idols(UserId(login))

    @_synchronized
    def is_crush(self, token: str, other: str) -> bool:
        return self.graph.is_crush(self.sessions.resolve(token), UserId(other))

    @_synchronized
    def add_crush(self, token: str, other: str) -> bool:
        login = self.sessions.resolve(token)
        mutual = self.graph.add_crush(login, UserId(other))
        if mutual:
            logger.info("Mutual crush", extra={"user_id": login, "target_id": other})
        return mutual

    @_synchronized
    def list_crushes(self, token: str) -> list[UserId]:
        return self.graph.list_crushes(self.sessions.resolve(token))

    @_synchronized
    def is_enemy(self, token: str, other: str) -> bool:
        return self.graph.is_enemy(self.sessions.resolve(token), UserId(other))

    @_synchronized
    def add_enemy(self, token: str, other: str) -> None:
        self.graph.add_enemy(self.sessions.resolve(token), UserId(other))

    @_synchronized
    def list_enemies(self, token: str) -> list[UserId]:
        return self.graph.list_enemies(self.sessions.resolve(token))

    # --- Messages ----------------------------------------------------------------

    @_synchronized
    def send_direct(self, token: str, recipient: str, content: str) -> None:
        self.messaging.send_direct(self.sessions.resolve(token), UserId(recipient), content)

    @_synchronized
    def read_direct(self, token: str) -> str:
        return self.messaging.read_direct(self.sessions.resolve(token))

    @_synchronized
    def send_community(self, token: str, community: str, content: str) -> int:
        return self.messaging.send_community(self.sessions.resolve(token), community, content)

    @_synchronized
    def read_community(self, token: str) -> str:
        return self.messaging.read_community(self.sessions.resolve(token))

    # --- Communities -------------------------------------------------------------

    @_synchronized
    def create_community(self, token: str, name: str, description: str) -> None:
        login = self.sessions.resolve(token)
        self.communities.create(login, name, description)
        logger.info("Community created", extra={"user_id": login, "community": name})

    @_synchronized
    def join_community(self, token: str, name: str) -> None:
        self.communities.join(self.sessions.resolve(token), name)

    @_synchronized
    def leave_community(self, token: str, name: str) -> None:
        self.communities.leave(self.sessions.resolve(token), name)

    @_synchronized
    def community_description(self, name: str) -> str:
        return self.communities.description(name)

    @_synchronized
    def community_owner(self, name: str) -> UserId:
        return self.communities.owner(name)

    @_synchronized
    def community_members(self, name: str) -> list[UserId]:
        return self.communities.members(name)

    @_synchronized
    def communities_of(self, login: str) -> list[CommunityName]:
        self.directory.get(login)
        return self.communities.communities_of(login)
