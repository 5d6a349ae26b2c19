"""Relation Prerequisite Enforcement — shared precondition checks for graph and messaging.

Invariants:
    - All functions are PURE reads: no mutation of NetworkState, no IO
    - Raise a JackutError on violation, return None on success
    - validate_outgoing chains the checks in a fixed order — first error wins:
      self-reference, existence, enemy block

Design Decisions:
    - Enemy block evaluated before any duplicate/already-related check, for every relation kind
    - Exceptions (not error dicts): dispatch and the HTTP handler map them uniformly
"""

from jackut.core.domain_types import RelationKind, UserId
from jackut.core.errors import (
    BlockedByEnemyError,
    DuplicateRelationError,
    ErrorContext,
    SelfReferenceError,
    UnknownUserError,
)
from jackut.core.network_state import NetworkState
from jackut.core.repository_protocols import IdentityDirectory


def check_not_self(actor: UserId, target: UserId, relation: str) -> None:
    """A user cannot hold a relation of any kind toward itself."""
    if actor == target:
        raise SelfReferenceError(relation, ErrorContext(user_id=actor, target_id=target))


def check_users_exist(directory: IdentityDirectory, *user_ids: UserId) -> None:
    """Every id must be registered in the directory."""
    for user_id in user_ids:
        if not user_id or not directory.exists(user_id):
            raise UnknownUserError(user_id, ErrorContext(target_id=user_id))


def is_blocked(state: NetworkState, actor: UserId, target: UserId) -> bool:
    """Whether `target` lists `actor` as an enemy."""
    return state.peek_relations(target).holds(RelationKind.ENEMY, actor)


def check_not_blocked(
    state: NetworkState, directory: IdentityDirectory, actor: UserId, target: UserId,
) -> None:
    """Rule: an enemy can neither message nor relate to the user who blocked them."""
    if is_blocked(state, actor, target):
        raise BlockedByEnemyError(
            directory.display_name(target),
            ErrorContext(user_id=actor, target_id=target),
        )


def check_not_related(
    state: NetworkState, actor: UserId, target: UserId,
    kind: RelationKind, relation: str,
) -> None:
    """Directional relations are added once."""
    if state.peek_relations(actor).holds(kind, target):
        raise DuplicateRelationError(
            relation, ErrorContext(user_id=actor, target_id=target),
        )


def validate_outgoing(
    state: NetworkState, directory: IdentityDirectory,
    actor: UserId, target: UserId, relation: str,
) -> None:
    """Chain self-reference, existence and enemy checks for an outgoing action."""
    check_not_self(actor, target, relation)
    check_users_exist(directory, actor, target)
    check_not_blocked(state, directory, actor, target)
