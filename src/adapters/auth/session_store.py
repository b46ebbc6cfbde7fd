"""In-memory session store adapter.

Implements SessionStorePort for the auth component. Sessions live for the
lifetime of the process; a restart logs everyone out.
"""

from src.domain.entities import Session


class InMemorySessionStore:
    """In-memory session storage - suitable for single-process deployments."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def get(self, token: str) -> Session | None:
        return self._sessions.get(token)

    def save(self, token: str, session: Session) -> None:
        self._sessions[token] = session
