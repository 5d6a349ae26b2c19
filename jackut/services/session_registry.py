"""Session Registry — maps opaque session tokens to user ids.

Invariants:
    - Tokens are issued sequentially as strings starting at "1" and never reused
      until a full reset
    - resolve() raises SessionNotFoundError for empty or unknown tokens
"""

from jackut.core.domain_types import SessionToken, UserId
from jackut.core.errors import AuthenticationError, ErrorContext, SessionNotFoundError
from jackut.services.user_directory import UserDirectory


class SessionRegistry:
    """Token -> login table backed by the user directory for authentication."""

    def __init__(
        self,
        directory: UserDirectory,
        sessions: dict[str, str] | None = None,
        next_token: int = 1,
    ):
        self._directory = directory
        self._sessions: dict[SessionToken, UserId] = {
            SessionToken(t): UserId(u) for t, u in (sessions or {}).items()
        }
        self._next_token = next_token

    @property
    def next_token(self) -> int:
        return self._next_token

    def open_session(self, login: str, password: str) -> SessionToken:
        if not self._directory.check_password(login, password):
            raise AuthenticationError(ErrorContext(target_id=login or None))
        token = SessionToken(str(self._next_token))
        self._next_token += 1
        self._sessions[token] = UserId(login)
        return token

    def close_session(self, token: str) -> bool:
        return self._sessions.pop(SessionToken(token), None) is not None

    def exists(self, token: str) -> bool:
        return token in self._sessions

    def resolve(self, token: str | None) -> UserId:
        if not token or token not in self._sessions:
            raise SessionNotFoundError()
        return self._sessions[SessionToken(token)]

    def close_user_sessions(self, login: str) -> int:
        tokens = [t for t, u in self._sessions.items() if u == login]
        for token in tokens:
            del self._sessions[token]
        return len(tokens)

    def items(self) -> dict[str, str]:
        return dict(self._sessions)

    def reset(self) -> None:
        self._sessions.clear()
        self._next_token = 1
