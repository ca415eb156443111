"""Session provider and credential helpers."""
from .session import (
    SessionUser,
    create_session_token,
    decode_session_token,
    get_current_session,
    is_admin,
    require_admin,
    require_session
)
from .password import hash_password, verify_password

__all__ = [
    "SessionUser",
    "create_session_token",
    "decode_session_token",
    "get_current_session",
    "is_admin",
    "require_admin",
    "require_session",
    "hash_password",
    "verify_password"
]
