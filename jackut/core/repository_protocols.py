"""Boundary Protocols — contracts between core and its collaborators.

Invariants:
    - Core NEVER imports from services — dependency arrows point inward only
    - Directory and community lookups are read-only from the core's side
    - Implementations provided by the shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: every collaborator is an in-memory table
"""

from typing import Protocol, Sequence

from jackut.core.domain_types import UserId


class IdentityDirectory(Protocol):
    """Contract for the user directory — implemented by services.user_directory."""
    def exists(self, user_id: str) -> bool: ...
    def display_name(self, user_id: str) -> str: ...
    def logins(self) -> Sequence[UserId]: ...


class CommunityLookup(Protocol):
    """Contract for the community registry — implemented by services.community_registry."""
    def exists(self, name: str) -> bool: ...
    def members(self, name: str) -> Sequence[UserId]: ...


class SystemNotifier(Protocol):
    """Contract used by the relationship graph to announce mutual crushes."""
    def deliver_system_notice(self, recipient: UserId, content: str) -> None: ...
