"""NetworkState — tests for relation records, inboxes and member lookup.

Tests cover:
    - RelationshipRecord add/discard never duplicates
    - discard_everywhere clears every relation kind
    - Inbox pop_first keeps the order of non-matching messages
    - peek_relations never stores records for unknown ids
"""

from jackut.core.domain_types import MessageKind, RelationKind
from jackut.core.network_state import Inbox, Message, NetworkState, RelationshipRecord


def _direct(sender: str, content: str) -> Message:
    return Message(sender, "x", content, MessageKind.DIRECT)


def _community(content: str) -> Message:
    return Message("y", "rock", content, MessageKind.COMMUNITY)


# ─── RelationshipRecord ──────────────────────────────────────────

def test_add_ignores_duplicates():
    record = RelationshipRecord()
    record.add(RelationKind.FRIEND, "joao")
    record.add(RelationKind.FRIEND, "joao")
    assert record.friends == ["joao"]


def test_discard_missing_id_is_noop():
    record = RelationshipRecord()
    record.discard(RelationKind.ENEMY, "joao")
    assert record.enemies == []


def test_discard_everywhere():
    record = RelationshipRecord()
    for kind in RelationKind:
        record.add(kind, "joao")
        record.add(kind, "ana")
    record.discard_everywhere("joao")
    for kind in RelationKind:
        assert record.relation(kind) == ["ana"]


# ─── Inbox ───────────────────────────────────────────────────────

def test_pop_first_returns_oldest_match():
    inbox = Inbox([_direct("a", "1"), _community("c"), _direct("b", "2")])
    popped = inbox.pop_first(lambda m: m.kind == MessageKind.DIRECT)
    assert popped.content == "1"
    assert [m.content for m in inbox] == ["c", "2"]


def test_pop_first_without_match_returns_none():
    inbox = Inbox([_community("c")])
    assert inbox.pop_first(lambda m: m.kind == MessageKind.DIRECT) is None
    assert len(inbox) == 1


def test_remove_where_reports_count():
    inbox = Inbox([_direct("a", "1"), _direct("b", "2"), _direct("a", "3")])
    assert inbox.remove_where(lambda m: m.sender == "a") == 2
    assert [m.content for m in inbox] == ["2"]


def test_count_by_kind():
    inbox = Inbox([_direct("a", "1"), _community("c")])
    assert inbox.count(MessageKind.DIRECT) == 1
    assert inbox.count(MessageKind.COMMUNITY) == 1


def test_message_render():
    assert _direct("maria", "oi").render() == "maria: oi"
    assert _community("show").render() == "show"


# ─── NetworkState ────────────────────────────────────────────────

def test_member_created_on_first_touch():
    state = NetworkState()
    state.inbox_of("maria").append(_direct("joao", "oi"))
    assert "maria" in state.members
    assert len(state.inbox_of("maria")) == 1


def test_peek_relations_does_not_store_unknown_ids():
    state = NetworkState()
    assert state.peek_relations("ghost").friends == []
    assert "ghost" not in state.members
