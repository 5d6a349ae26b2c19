"""Messaging Engine — per-user FIFO inboxes for direct and community messages.

Invariants:
    - Direct messages are blocked when the recipient lists the sender as an enemy
    - Reads are destructive: the oldest message of the requested kind is removed
      and returned; messages of the other kind keep their positions
    - Community fan-out is a snapshot of the member list at send time
    - System notices bypass the self-reference and enemy checks
    - purge_user never raises

Design Decisions:
    - One immutable Message instance is shared by every member inbox on fan-out
    - Members that left the directory are skipped during fan-out
"""

import logging

from jackut.core.domain_types import SYSTEM_SENDER, MessageKind, UserId
from jackut.core.enforce_relations import check_users_exist, validate_outgoing
from jackut.core.errors import ErrorContext, NoMessageError, UnknownCommunityError
from jackut.core.network_state import Message, NetworkState
from jackut.core.repository_protocols import CommunityLookup, IdentityDirectory

logger = logging.getLogger(__name__)


class MessagingEngine:
    """Owns every Inbox inside the shared NetworkState."""

    def __init__(
        self,
        state: NetworkState,
        directory: IdentityDirectory,
        communities: CommunityLookup,
        system_sender: UserId = SYSTEM_SENDER,
    ):
        self._state = state
        self._directory = directory
        self._communities = communities
        self._system_sender = system_sender

    # --- Direct messages ---------------------------------------------------------

    def send_direct(self, sender: UserId, recipient: UserId, content: str) -> None:
        validate_outgoing(self._state, self._directory, sender, recipient, "message recipient")
        self._state.inbox_of(recipient).append(
            Message(sender, recipient, content, MessageKind.DIRECT),
        )

    def read_direct(self, user_id: UserId) -> str:
        """Pop the oldest direct message, rendered as 'sender: content'."""
        return self._read(user_id, MessageKind.DIRECT)

    def deliver_system_notice(self, recipient: UserId, content: str) -> None:
        """Internal entry point: a direct message from the reserved system sender."""
        self._state.inbox_of(recipient).append(
            Message(self._system_sender, recipient, content, MessageKind.DIRECT),
        )

    # --- Community messages ------------------------------------------------------

    def send_community(self, sender: UserId, community: str, content: str) -> int:
        """Deliver one copy to every current member. Returns the fan-out size."""
        if not self._communities.exists(community):
            raise UnknownCommunityError(
                community, ErrorContext(user_id=sender, target_id=community),
            )
        check_users_exist(self._directory, sender)

        message = Message(sender, community, content, MessageKind.COMMUNITY)
        recipients = [
            member for member in self._communities.members(community)
            if self._directory.exists(member)
        ]
        for member in recipients:
            self._state.inbox_of(member).append(message)
        logger.debug(f"Community message to {community}: {len(recipients)} inboxes")
        return len(recipients)

    def read_community(self, user_id: UserId) -> str:
        """Pop the oldest community message, rendered as its raw content."""
        return self._read(user_id, MessageKind.COMMUNITY)

    # --- Queries -----------------------------------------------------------------

    def unread_count(self, user_id: UserId, kind: MessageKind) -> int:
        member = self._state.members.get(user_id)
        return member.inbox.count(kind) if member is not None else 0

    # --- Lifecycle ---------------------------------------------------------------

    def purge_user(self, user_id: UserId) -> None:
        """Drop the user's inbox and every message they authored elsewhere."""
        member = self._state.members.get(user_id)
        if member is not None:
            member.inbox.clear()
        for other in self._state.members.values():
            other.inbox.remove_where(lambda m: m.sender == user_id)

    def reset(self) -> None:
        for member in self._state.members.values():
            member.inbox.clear()

    # --- Helpers -----------------------------------------------------------------

    def _read(self, user_id: UserId, kind: MessageKind) -> str:
        check_users_exist(self._directory, user_id)
        member = self._state.members.get(user_id)
        message = (
            member.inbox.pop_first(lambda m: m.kind == kind)
            if member is not None else None
        )
        if message is None:
            raise NoMessageError(kind.value, ErrorContext(user_id=user_id))
        return message.render()
