"""Relationship Graph — friend invites, fans, crushes and enemies between users.

Invariants:
    - Friend invites live on the receiver's pending list; mutual friendship only
      forms when the receiver invites the original sender back
    - An invite resolves into friendship or stays pending, never both
    - Enemy block is checked first and blocks friend/fan/crush requests unconditionally
    - A reciprocating invite wins over the duplicate/already-friends checks
    - A mutual crush triggers exactly one system notice per party
    - remove_user is total and never raises

Design Decisions:
    - Fans are not indexed in reverse: list_fans scans the directory (O(n), accepted)
    - Crush notices go through the SystemNotifier protocol, so the graph never
      imports the messaging engine
"""

import logging

from jackut.core.domain_types import CRUSH_NOTICE_TEMPLATE, RelationKind, UserId
from jackut.core.enforce_relations import (
    check_not_related,
    check_not_self,
    check_users_exist,
    validate_outgoing,
)
from jackut.core.errors import AlreadyFriendsError, DuplicateInviteError, ErrorContext
from jackut.core.network_state import NetworkState, RelationshipRecord
from jackut.core.repository_protocols import IdentityDirectory, SystemNotifier

logger = logging.getLogger(__name__)


class RelationshipGraph:
    """Owns every RelationshipRecord inside the shared NetworkState."""

    def __init__(
        self,
        state: NetworkState,
        directory: IdentityDirectory,
        notifier: SystemNotifier,
    ):
        self._state = state
        self._directory = directory
        self._notifier = notifier

    # --- Lifecycle ---------------------------------------------------------------

    def register_user(self, user_id: UserId) -> None:
        """Create the empty record for a newly created user."""
        self._state.member(user_id)

    def remove_user(self, user_id: UserId) -> None:
        """Purge the user's record and every reference to it elsewhere."""
        self._state.members.pop(user_id, None)
        for member in self._state.members.values():
            member.relations.discard_everywhere(user_id)

    def reset(self) -> None:
        for member in self._state.members.values():
            member.relations = RelationshipRecord()

    # --- Friends -----------------------------------------------------------------

    def is_friend(self, user_id: UserId, other: UserId) -> bool:
        if not self._known(user_id, other):
            return False
        return self._state.peek_relations(user_id).holds(RelationKind.FRIEND, other)

    def request_friend(self, user_id: UserId, other: UserId) -> bool:
        """Invite `other`, or accept their pending invite.

        Returns True when the call formed a mutual friendship.
        """
        validate_outgoing(self._state, self._directory, user_id, other, "friend")

        mine = self._state.relations_of(user_id)
        theirs = self._state.relations_of(other)

        if mine.holds(RelationKind.PENDING_INVITE, other):
            mine.discard(RelationKind.PENDING_INVITE, other)
            theirs.discard(RelationKind.PENDING_INVITE, user_id)
            mine.add(RelationKind.FRIEND, other)
            theirs.add(RelationKind.FRIEND, user_id)
            logger.debug(f"Friendship formed: {user_id} <-> {other}")
            return True

        ctx = ErrorContext(user_id=user_id, target_id=other)
        if theirs.holds(RelationKind.PENDING_INVITE, user_id):
            raise DuplicateInviteError(ctx)
        if theirs.holds(RelationKind.FRIEND, user_id):
            raise AlreadyFriendsError(ctx)

        theirs.add(RelationKind.PENDING_INVITE, user_id)
        return False

    def list_friends(self, user_id: UserId) -> list[UserId]:
        check_users_exist(self._directory, user_id)
        return list(self._state.peek_relations(user_id).friends)

    def list_pending_invites(self, user_id: UserId) -> list[UserId]:
        """Users waiting for `user_id` to accept their invite."""
        check_users_exist(self._directory, user_id)
        return list(self._state.peek_relations(user_id).pending_invites)

    # --- Fans / idols ------------------------------------------------------------

    def is_fan(self, user_id: UserId, idol: UserId) -> bool:
        if not self._known(user_id, idol):
            return False
        return self._state.peek_relations(user_id).holds(RelationKind.IDOL, idol)

    def add_fan(self, user_id: UserId, idol: UserId) -> None:
        """Make `user_id` a fan of `idol`. Directional, no reciprocity."""
        validate_outgoing(self._state, self._directory, user_id, idol, "idol")
        check_not_related(self._state, user_id, idol, RelationKind.IDOL, "idol")
        self._state.relations_of(user_id).add(RelationKind.IDOL, idol)

    def list_fans(self, idol: UserId) -> list[UserId]:
        """Users that admire `idol`, in directory order."""
        check_users_exist(self._directory, idol)
        return [
            login for login in self._directory.logins()
            if login != idol
            and self._state.peek_relations(login).holds(RelationKind.IDOL, idol)
        ]

    def list_idols(self, user_id: UserId) -> list[UserId]:
        check_users_exist(self._directory, user_id)
        return list(self._state.peek_relations(user_id).idols)

    # --- Crushes -----------------------------------------------------------------

    def is_crush(self, user_id: UserId, other: UserId) -> bool:
        if not self._known(user_id, other):
            return False
        return self._state.peek_relations(user_id).holds(RelationKind.CRUSH, other)

    def add_crush(self, user_id: UserId, other: UserId) -> bool:
        """Add a crush. Returns True when the crush became mutual.

        On mutual formation each party receives one system notice naming the other.
        """
        validate_outgoing(self._state, self._directory, user_id, other, "crush")
        check_not_related(self._state, user_id, other, RelationKind.CRUSH, "crush")

        self._state.relations_of(user_id).add(RelationKind.CRUSH, other)
        if not self._state.peek_relations(other).holds(RelationKind.CRUSH, user_id):
            return False

        self._notifier.deliver_system_notice(
            user_id,
            CRUSH_NOTICE_TEMPLATE.format(name=self._directory.display_name(other)),
        )
        self._notifier.deliver_system_notice(
            other,
            CRUSH_NOTICE_TEMPLATE.format(name=self._directory.display_name(user_id)),
        )
        logger.debug(f"Mutual crush: {user_id} <-> {other}")
        return True

    def list_crushes(self, user_id: UserId) -> list[UserId]:
        check_users_exist(self._directory, user_id)
        return list(self._state.peek_relations(user_id).crushes)

    # --- Enemies -----------------------------------------------------------------

    def is_enemy(self, user_id: UserId, other: UserId) -> bool:
        if not self._known(user_id, other):
            return False
        return self._state.peek_relations(user_id).holds(RelationKind.ENEMY, other)

    def add_enemy(self, user_id: UserId, other: UserId) -> None:
        """Block `other`. No reciprocity and no enemy-of-enemy check."""
        check_not_self(user_id, other, "enemy")
        check_users_exist(self._directory, user_id, other)
        check_not_related(self._state, user_id, other, RelationKind.ENEMY, "enemy")
        self._state.relations_of(user_id).add(RelationKind.ENEMY, other)

    def list_enemies(self, user_id: UserId) -> list[UserId]:
        check_users_exist(self._directory, user_id)
        return list(self._state.peek_relations(user_id).enemies)

    # --- Helpers -----------------------------------------------------------------

    def _known(self, *user_ids: UserId) -> bool:
        return all(u and self._directory.exists(u) for u in user_ids)
