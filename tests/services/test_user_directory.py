"""UserDirectory — tests for account creation and profile attributes.

Tests cover:
    - create_user rejects empty login/password, duplicate logins and the
      reserved system sender login
    - Reserved attributes 'nome' and 'login' resolve from the account
    - Unset attributes raise AttributeNotSetError
    - Both reserved attributes are read-only
"""

import pytest

from jackut.core.errors import (
    AttributeNotSetError,
    InvalidUserDataError,
    UnknownUserError,
)
from jackut.services.user_directory import UserDirectory


@pytest.fixture
def directory():
    d = UserDirectory()
    d.create_user("maria", "pw", "Maria Silva")
    return d


def test_create_user_rejects_empty_login(directory):
    with pytest.raises(InvalidUserDataError) as exc:
        directory.create_user("", "pw", "X")
    assert exc.value.field == "login"


def test_create_user_rejects_empty_password(directory):
    with pytest.raises(InvalidUserDataError) as exc:
        directory.create_user("joao", "", "Joao")
    assert exc.value.field == "password"


def test_create_user_rejects_duplicate_login(directory):
    with pytest.raises(InvalidUserDataError):
        directory.create_user("maria", "other", "Other")
    assert directory.display_name("maria") == "Maria Silva"


def test_create_user_rejects_system_sender_login(directory):
    with pytest.raises(InvalidUserDataError) as exc:
        directory.create_user("jackut", "pw", "Jackut")
    assert exc.value.field == "login"
    assert not directory.exists("jackut")


def test_create_user_rejects_custom_reserved_login(directory):
    with pytest.raises(InvalidUserDataError):
        directory.create_user("sistema", "pw", "Sistema", reserved_login="sistema")
    directory.create_user("jackut", "pw", "Jackut", reserved_login="sistema")
    assert directory.exists("jackut")


def test_logins_in_creation_order(directory):
    directory.create_user("joao", "pw", "Joao")
    directory.create_user("ana", "pw", "Ana")
    assert directory.logins() == ["maria", "joao", "ana"]


def test_reserved_attributes(directory):
    assert directory.get_attribute("maria", "nome") == "Maria Silva"
    assert directory.get_attribute("maria", "login") == "maria"


def test_unset_attribute_raises(directory):
    with pytest.raises(AttributeNotSetError):
        directory.get_attribute("maria", "cidade")


def test_edit_profile_sets_custom_attribute(directory):
    directory.edit_profile("maria", "cidade", "Maceió")
    assert directory.get_attribute("maria", "cidade") == "Maceió"
    directory.edit_profile("maria", "cidade", "Recife")
    assert directory.get_attribute("maria", "cidade") == "Recife"


def test_name_is_read_only(directory):
    with pytest.raises(InvalidUserDataError) as exc:
        directory.edit_profile("maria", "nome", "Outra")
    assert exc.value.field == "nome"
    assert directory.get_attribute("maria", "nome") == "Maria Silva"
    assert directory.display_name("maria") == "Maria Silva"


def test_login_is_read_only(directory):
    with pytest.raises(InvalidUserDataError):
        directory.edit_profile("maria", "login", "mary")
    assert directory.exists("maria")


def test_unknown_user_raises(directory):
    with pytest.raises(UnknownUserError):
        directory.get_attribute("ghost", "nome")


def test_check_password(directory):
    assert directory.check_password("maria", "pw")
    assert not directory.check_password("maria", "wrong")
    assert not directory.check_password("ghost", "pw")


def test_remove_and_reset(directory):
    directory.remove("maria")
    assert not directory.exists("maria")
    directory.remove("maria")
    directory.create_user("joao", "pw", "Joao")
    directory.reset()
    assert directory.logins() == []
