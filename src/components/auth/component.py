import hashlib
from datetime import timedelta
from uuid import uuid4

from src.domain.entities import Session

from .models import AuthOutput, CreateSessionInput, LoginInput
from .ports import AuthAdapterPort, SessionStorePort, TimePort, UserRepoPort


def run_login(
    inp: LoginInput, user_repo: UserRepoPort, auth_adapter: AuthAdapterPort
) -> AuthOutput:
    user = user_repo.get_user_by_slug(inp.slug)
    if not user:
        return AuthOutput(success=False, error="Invalid credentials")

    if not auth_adapter.verify_password(inp.password, user.password_hash):
        return AuthOutput(success=False, error="Invalid credentials")

    return AuthOutput(user=user, success=True)


def run_create_session(
    inp: CreateSessionInput,
    auth_adapter: AuthAdapterPort,
    session_store: SessionStorePort,
    time: TimePort,
) -> AuthOutput:
    token = auth_adapter.create_token(inp.user.id, inp.ttl_minutes)
    now = time.now_utc()

    session = Session(
        id=str(uuid4()),
        user_id=inp.user.id,
        token_hash=hashlib.sha256(token.encode()).hexdigest(),
        expires_at=now + timedelta(minutes=inp.ttl_minutes),
        created_at=now,
    )
    session_store.save(token, session)
    return AuthOutput(user=inp.user, session=session, token_raw=token, success=True)


def run_establish(
    slug: str,
    password: str,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    session_store: SessionStorePort,
    time: TimePort,
    ttl_minutes: int = 24 * 60,
) -> AuthOutput:
    """Log a user in: verify the password, then open a session."""
    login = run_login(LoginInput(slug=slug, password=password), user_repo, auth_adapter)
    if not login.success or login.user is None:
        return login

    return run_create_session(
        CreateSessionInput(user=login.user, ttl_minutes=ttl_minutes),
        auth_adapter,
        session_store,
        time,
    )


def run(
    slug: str,
    password: str,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    session_store: SessionStorePort,
    time: TimePort,
) -> AuthOutput:
    """Main entry point for the auth component."""
    return run_establish(slug, password, user_repo, auth_adapter, session_store, time)
