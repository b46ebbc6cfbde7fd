"""Password hashing and session tokens.

Passwords are hashed with argon2 through passlib; session tokens are signed
JWTs (python-jose). The installer hashes the owner's password and logs the
owner in with the same adapter, so both sides always agree on the scheme.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from passlib.context import CryptContext

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class JWTAuthAdapter:
    """Auth adapter that uses JWT tokens and passlib for password hashing."""

    def __init__(self, secret_key: str, algorithm: str = ALGORITHM) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm

    def hash_password(self, password: str) -> str:
        result: str = pwd_context.hash(password)
        return result

    def verify_password(self, plain: str, hashed: str) -> bool:
        try:
            result: bool = pwd_context.verify(plain, hashed)
        except ValueError:
            # Hash not produced by any configured scheme.
            return False
        return result

    def create_token(
        self, user_id: Any, ttl_minutes: int, now_utc: datetime | None = None
    ) -> str:
        current_time = now_utc if now_utc is not None else datetime.now(UTC)
        claims = {
            "sub": str(user_id),
            "iat": current_time,
            "exp": current_time + timedelta(minutes=ttl_minutes),
        }
        token: str = jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        return token

