"""JackutService — end-to-end tests through session tokens.

Tests cover:
    - Friendship via reciprocal invites, observed from both sides
    - Enemy block on friend, fan, crush and direct message
    - FIFO direct reads and community broadcast
    - Mutual crush notices; the system sender login cannot be registered
    - Reserved profile attributes are read-only through sessions
    - remove_user cascade across relations, inboxes, communities and sessions
    - reset and snapshot/restore
"""

import pytest

from jackut.core.errors import (
    AuthenticationError,
    BlockedByEnemyError,
    DuplicateInviteError,
    InvalidUserDataError,
    NoMessageError,
    SessionNotFoundError,
    SnapshotError,
    UnknownCommunityError,
    UnknownUserError,
)
from jackut.services.jackut_service import JackutService


# ─── Friends ─────────────────────────────────────────────────────

def test_friendship_needs_both_invites(seeded):
    service, maria, joao = seeded

    assert service.request_friend(maria, "joao") is False
    assert service.is_friend(maria, "joao") is False
    assert service.list_pending_invites(joao) == ["maria"]
    with pytest.raises(DuplicateInviteError):
        service.request_friend(maria, "joao")

    assert service.request_friend(joao, "maria") is True
    assert service.is_friend(maria, "joao")
    assert service.is_friend(joao, "maria")
    assert service.list_friends(maria) == ["joao"]
    assert service.list_pending_invites(joao) == []


def test_is_friend_with_invalid_session_is_false(seeded):
    service, _, _ = seeded
    assert service.is_friend("", "joao") is False
    assert service.is_friend("999", "joao") is False


def test_operations_require_session(seeded):
    service, _, _ = seeded
    with pytest.raises(SessionNotFoundError):
        service.request_friend("", "joao")
    with pytest.raises(SessionNotFoundError):
        service.read_direct("999")


# ─── Enemies ─────────────────────────────────────────────────────

def test_enemy_blocks_every_outgoing_action(seeded):
    service, maria, joao = seeded
    service.add_enemy(joao, "maria")

    for action in (
        lambda: service.request_friend(maria, "joao"),
        lambda: service.add_fan(maria, "joao"),
        lambda: service.add_crush(maria, "joao"),
        lambda: service.send_direct(maria, "joao", "oi"),
    ):
        with pytest.raises(BlockedByEnemyError):
            action()

    assert service.list_pending_invites(joao) == []
    assert service.list_fans("joao") == []
    assert not service.is_crush(maria, "joao")
    with pytest.raises(NoMessageError):
        service.read_direct(joao)
    assert service.is_enemy(joao, "maria")
    assert not service.is_enemy(maria, "joao")
    assert service.list_enemies(joao) == ["maria"]


# ─── Fans / crushes ──────────────────────────────────────────────

def test_fans_and_idols(seeded):
    service, maria, joao = seeded
    service.add_fan(maria, "joao")
    assert service.is_fan("maria", "joao")
    assert not service.is_fan("joao", "maria")
    assert service.list_fans("joao") == ["maria"]
    assert service.list_idols("maria") == ["joao"]


def test_mutual_crush_sends_notices(seeded):
    service, maria, joao = seeded
    assert service.add_crush(maria, "joao") is False
    assert service.add_crush(joao, "maria") is True

    assert service.read_direct(maria) == "jackut: Joao é seu paquera - Recado do Jackut."
    assert service.read_direct(joao) == "jackut: Maria é seu paquera - Recado do Jackut."
    assert service.list_crushes(maria) == ["joao"]


def test_crush_notice_uses_configured_sender():
    service = JackutService(system_sender="sistema")
    service.create_user("a", "pw", "A")
    service.create_user("b", "pw", "B")
    a, b = service.open_session("a", "pw"), service.open_session("b", "pw")
    service.add_crush(a, "b")
    service.add_crush(b, "a")
    assert service.read_direct(a).startswith("sistema: ")


def test_system_sender_login_cannot_be_registered(seeded):
    service, maria, joao = seeded
    with pytest.raises(InvalidUserDataError):
        service.create_user("jackut", "pw", "Impostor")
    assert not service.directory.exists("jackut")

    with pytest.raises(AuthenticationError):
        service.open_session("jackut", "pw")

    service.add_crush(maria, "joao")
    service.add_crush(joao, "maria")
    service.remove_user(joao)
    assert service.read_direct(maria) == "jackut: Joao é seu paquera - Recado do Jackut."


def test_configured_sender_login_is_reserved():
    service = JackutService(system_sender="sistema")
    with pytest.raises(InvalidUserDataError):
        service.create_user("sistema", "pw", "Impostor")
    service.create_user("jackut", "pw", "Jackut")
    assert service.directory.exists("jackut")


# ─── Profile ─────────────────────────────────────────────────────

def test_reserved_attributes_are_read_only(seeded):
    service, maria, _ = seeded
    for attribute in ("nome", "login"):
        with pytest.raises(InvalidUserDataError):
            service.edit_profile(maria, attribute, "Outra")
    assert service.get_user_attribute("maria", "nome") == "Maria"
    assert service.get_user_attribute("maria", "login") == "maria"


# ─── Messages ────────────────────────────────────────────────────

def test_direct_messages_fifo(seeded):
    service, maria, joao = seeded
    service.send_direct(maria, "joao", "um")
    service.send_direct(maria, "joao", "dois")
    assert service.read_direct(joao) == "maria: um"
    assert service.read_direct(joao) == "maria: dois"
    with pytest.raises(NoMessageError):
        service.read_direct(joao)


def test_community_broadcast(seeded):
    service, maria, joao = seeded
    service.create_community(maria, "rock", "Rock lovers")
    service.join_community(joao, "rock")

    assert service.send_community(joao, "rock", "show hoje") == 2
    assert service.read_community(maria) == "show hoje"
    assert service.read_community(joao) == "show hoje"
    with pytest.raises(UnknownCommunityError):
        service.send_community(joao, "jazz", "oi")


def test_leaving_keeps_delivered_copy_but_stops_new_ones(seeded):
    service, maria, joao = seeded
    service.create_community(maria, "rock", "")
    service.join_community(joao, "rock")
    service.send_community(maria, "rock", "antes")
    service.leave_community(joao, "rock")

    assert service.send_community(maria, "rock", "depois") == 1
    assert service.read_community(joao) == "antes"
    with pytest.raises(NoMessageError):
        service.read_community(joao)


def test_communities_of(seeded):
    service, maria, joao = seeded
    service.create_community(maria, "rock", "")
    service.create_community(joao, "jazz", "")
    service.join_community(maria, "jazz")
    assert service.communities_of("maria") == ["rock", "jazz"]
    with pytest.raises(UnknownUserError):
        service.communities_of("ghost")


# ─── remove_user / reset ─────────────────────────────────────────

def test_remove_user_cascades(seeded):
    service, maria, joao = seeded
    service.create_user("ana", "pw", "Ana")
    ana = service.open_session("ana", "pw")

    service.request_friend(maria, "joao")
    service.request_friend(joao, "maria")
    service.request_friend(maria, "ana")
    service.add_fan(maria, "ana")
    service.add_crush(ana, "maria")
    service.send_direct(maria, "ana", "oi ana")
    service.create_community(maria, "rock", "")
    service.create_community(joao, "jazz", "")
    service.join_community(maria, "jazz")
    service.send_community(maria, "jazz", "ola jazz")

    service.remove_user(maria)

    assert not service.directory.exists("maria")
    assert not service.session_exists(maria)
    assert service.list_friends(joao) == []
    assert service.list_pending_invites(ana) == []
    assert service.list_fans("ana") == []
    assert service.list_crushes(ana) == []
    assert not service.communities.exists("rock")
    assert service.community_members("jazz") == ["joao"]
    with pytest.raises(NoMessageError):
        service.read_direct(ana)
    with pytest.raises(NoMessageError):
        service.read_community(joao)
    with pytest.raises(UnknownUserError):
        service.request_friend(joao, "maria")


def test_login_reusable_after_removal(seeded):
    service, maria, _ = seeded
    service.remove_user(maria)
    service.create_user("maria", "new", "Maria Nova")
    token = service.open_session("maria", "new")
    assert service.list_friends(token) == []


def test_reset_clears_everything(seeded):
    service, maria, joao = seeded
    service.request_friend(maria, "joao")
    service.create_community(maria, "rock", "")
    service.send_direct(joao, "maria", "oi")

    service.reset()

    assert service.directory.logins() == []
    assert not service.session_exists(maria)
    assert not service.communities.exists("rock")
    assert service.network.members == {}
    service.create_user("maria", "pw", "Maria")
    assert service.open_session("maria", "pw") == "1"


# ─── Snapshot ────────────────────────────────────────────────────

def test_snapshot_restore_preserves_state(seeded):
    service, maria, joao = seeded
    service.request_friend(maria, "joao")
    service.create_community(maria, "rock", "Rock lovers")
    service.send_direct(joao, "maria", "oi")
    service.edit_profile(maria, "cidade", "Maceió")

    restored = JackutService.from_snapshot(service.snapshot())

    assert restored.list_pending_invites(joao) == ["maria"]
    assert restored.community_description("rock") == "Rock lovers"
    assert restored.get_user_attribute("maria", "cidade") == "Maceió"
    assert restored.read_direct(maria) == "joao: oi"
    assert restored.open_session("maria", "pw-maria") == "3"


def test_restore_rejects_unknown_version(seeded):
    service, maria, _ = seeded
    with pytest.raises(SnapshotError):
        service.restore({"version": 999})
    assert service.login_of_session(maria) == "maria"
