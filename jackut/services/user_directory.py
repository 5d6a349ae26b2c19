"""User Directory — accounts, passwords and profile attributes.

Invariants:
    - Logins are unique and non-empty; passwords are non-empty
    - 'nome' and 'login' are resolved from the account itself, never stored
      in the attribute map; both are read-only
    - The system sender login is reserved and cannot be registered
    - logins() iterates in account creation order

Design Decisions:
    - Plain dict table, no persistence here: system_snapshot serializes it
    - Passwords compared in plain text (authentication security is out of scope)
"""

from dataclasses import dataclass, field

from jackut.core.domain_types import (
    ATTRIBUTE_LOGIN,
    ATTRIBUTE_NAME,
    RESERVED_ATTRIBUTES,
    SYSTEM_SENDER,
    UserId,
)
from jackut.core.errors import (
    AttributeNotSetError,
    ErrorContext,
    InvalidUserDataError,
    UnknownUserError,
)


@dataclass
class UserAccount:
    """One registered user."""
    login: UserId
    password: str
    name: str
    attributes: dict[str, str] = field(default_factory=dict)


class UserDirectory:
    """Authoritative set of user ids and their profile attributes."""

    def __init__(self, accounts: list[UserAccount] | None = None):
        self._accounts: dict[UserId, UserAccount] = {
            a.login: a for a in accounts or []
        }

    def create_user(
        self, login: str, password: str, name: str,
        reserved_login: str = SYSTEM_SENDER,
    ) -> UserAccount:
        """Register an account; `reserved_login` is the system sender id."""
        if not login:
            raise InvalidUserDataError("Invalid login.", "login")
        if login == reserved_login:
            raise InvalidUserDataError(
                "This login is reserved by the system.", "login",
                ErrorContext(target_id=login),
            )
        if not password:
            raise InvalidUserDataError("Invalid password.", "password")
        if login in self._accounts:
            raise InvalidUserDataError(
                "An account with this login already exists.", "login",
                ErrorContext(target_id=login),
            )
        account = UserAccount(login=UserId(login), password=password, name=name)
        self._accounts[account.login] = account
        return account

    def exists(self, user_id: str) -> bool:
        return user_id in self._accounts

    def get(self, user_id: str) -> UserAccount:
        account = self._accounts.get(UserId(user_id))
        if account is None:
            raise UnknownUserError(user_id, ErrorContext(target_id=user_id))
        return account

    def display_name(self, user_id: str) -> str:
        return self.get(user_id).name

    def logins(self) -> list[UserId]:
        return list(self._accounts)

    def accounts(self) -> list[UserAccount]:
        return list(self._accounts.values())

    def check_password(self, login: str, password: str) -> bool:
        account = self._accounts.get(UserId(login))
        return account is not None and account.password == password

    def get_attribute(self, user_id: str, attribute: str) -> str:
        """Read a profile attribute; reserved keys resolve to name and login."""
        account = self.get(user_id)
        if attribute == ATTRIBUTE_NAME:
            return account.name
        if attribute == ATTRIBUTE_LOGIN:
            return account.login
        if attribute not in account.attributes:
            raise AttributeNotSetError(attribute, ErrorContext(user_id=user_id))
        return account.attributes[attribute]

    def edit_profile(self, user_id: str, attribute: str, value: str) -> None:
        account = self.get(user_id)
        if attribute in RESERVED_ATTRIBUTES:
            raise InvalidUserDataError(
                f"The {attribute} attribute is read-only.", attribute,
                ErrorContext(user_id=user_id),
            )
        account.attributes[attribute] = value

    def remove(self, user_id: str) -> None:
        self._accounts.pop(UserId(user_id), None)

    def reset(self) -> None:
        self._accounts.clear()
