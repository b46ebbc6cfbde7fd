"""
Auth component port definitions.

The installer satisfies UserRepoPort with its seed repository, so only the
slug lookup is required here.
"""

from datetime import datetime
from typing import Protocol

from src.domain.entities import Session, User


class UserRepoPort(Protocol):
    def get_user_by_slug(self, slug: str) -> User | None: ...


class AuthAdapterPort(Protocol):
    def verify_password(self, plain: str, hashed: str) -> bool: ...

    def create_token(self, user_id: object, ttl_minutes: int) -> str: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...


class SessionStorePort(Protocol):
    def get(self, token: str) -> Session | None: ...

    def save(self, token: str, session: Session) -> None:
        """Save session with the raw token as key."""
        ...
