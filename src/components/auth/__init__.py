"""
Auth component - Session establishment.

Verifies a user's password and opens an authenticated session.
"""

from .component import run, run_create_session, run_establish, run_login
from .models import AuthOutput, CreateSessionInput, LoginInput
from .ports import AuthAdapterPort, SessionStorePort, TimePort, UserRepoPort

__all__ = [
    # Entry points
    "run",
    "run_create_session",
    "run_establish",
    "run_login",
    # Models
    "AuthOutput",
    "CreateSessionInput",
    "LoginInput",
    # Ports
    "AuthAdapterPort",
    "SessionStorePort",
    "TimePort",
    "UserRepoPort",
]
