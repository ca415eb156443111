"""Session tokens and per-request session lookup."""
import time
from typing import Optional
from authlib.jose import JoseError, jwt
from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel
from famous_since.config import settings

ADMIN_ROLE = "admin"
ALGORITHM = "HS256"


class SessionUser(BaseModel):
    """User claims carried in the session token."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


def is_admin(user: Optional[SessionUser]) -> bool:
    """
    Case-insensitive admin check.

    A session without a role claim is treated as a regular user.
    """
    if user is None or not user.role:
        return False
    return user.role.lower() == ADMIN_ROLE


def create_session_token(user: SessionUser, expires_in_seconds: Optional[int] = None) -> str:
    """Sign a session token for the given user."""
    now = int(time.time())
    lifetime = expires_in_seconds if expires_in_seconds is not None else settings.session_max_age_seconds
    payload = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "iat": now,
        "exp": now + lifetime
    }
    token = jwt.encode({"alg": ALGORITHM, "typ": "JWT"}, payload, settings.session_secret)
    return token.decode() if isinstance(token, bytes) else token


def decode_session_token(token: str) -> Optional[SessionUser]:
    """Verify a session token. Returns None when it is invalid or expired."""
    try:
        claims = jwt.decode(token, settings.session_secret)
        claims.validate()
    except (JoseError, ValueError) as e:
        print(f"[AUTH] Rejected session token: {e}")
        return None

    if not claims.get("sub"):
        return None

    return SessionUser(
        id=str(claims["sub"]),
        email=claims.get("email"),
        name=claims.get("name"),
        role=claims.get("role")
    )


def _extract_token(request: Request) -> Optional[str]:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    return None


def get_current_session(request: Request) -> Optional[SessionUser]:
    """
    Dependency returning the session for this request, or None.

    The token is decoded on every request so role changes take effect
    as soon as a new token is issued.
    """
    token = _extract_token(request)
    if not token:
        return None
    return decode_session_token(token)


def require_session(user: Optional[SessionUser] = Depends(get_current_session)) -> SessionUser:
    """Dependency that rejects requests without a valid session."""
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


def require_admin(user: SessionUser = Depends(require_session)) -> SessionUser:
    """Dependency that only lets admins through."""
    if not is_admin(user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
