"""Core test fixtures — in-memory fakes for the core's collaborators.

Invariants:
    - Fakes satisfy the Protocols in core/repository_protocols.py structurally
    - Every test gets a fresh NetworkState and fresh fakes

Design Decisions:
    - Fakes instead of the real services: core tests stay independent of services/
"""

import pytest

from jackut.core.messaging_engine import MessagingEngine
from jackut.core.network_state import NetworkState
from jackut.core.relationship_graph import RelationshipGraph


class FakeDirectory:
    """Login -> display name table."""

    def __init__(self, *logins: str):
        self.names = {login: login.capitalize() for login in logins}

    def exists(self, user_id):
        return user_id in self.names

    def display_name(self, user_id):
        return self.names[user_id]

    def logins(self):
        return list(self.names)

    def remove(self, user_id):
        self.names.pop(user_id, None)


class FakeCommunities:
    """Community name -> ordered member list."""

    def __init__(self):
        self.groups: dict[str, list[str]] = {}

    def exists(self, name):
        return name in self.groups

    def members(self, name):
        return list(self.groups[name])


@pytest.fixture
def directory():
    return FakeDirectory("maria", "joao", "ana", "pedro")


@pytest.fixture
def communities():
    return FakeCommunities()


@pytest.fixture
def state():
    return NetworkState()


@pytest.fixture
def messaging(state, directory, communities):
    return MessagingEngine(state, directory, communities)


@pytest.fixture
def graph(state, directory, messaging):
    g = RelationshipGraph(state, directory, messaging)
    for login in directory.logins():
        g.register_user(login)
    return g
