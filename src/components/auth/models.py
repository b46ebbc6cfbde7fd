from dataclasses import dataclass

from src.domain.entities import Session, User


@dataclass
class LoginInput:
    slug: str
    password: str


@dataclass
class CreateSessionInput:
    user: User
    ttl_minutes: int = 24 * 60


@dataclass
class AuthOutput:
    user: User | None = None
    session: Session | None = None
    token_raw: str | None = None
    success: bool = False
    error: str | None = None
