"""Auth routes: credentials login, session lookup and role check."""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from data.database.connection import get_db
from data.database.store_models import User
from famous_since.auth.password import verify_password
from famous_since.auth.session import (
    SessionUser,
    create_session_token,
    get_current_session,
    is_admin,
    require_session
)
from famous_since.config import settings

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Credentials posted by the login page."""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: SessionUser


@router.post("/login", response_model=LoginResponse, summary="Sign in with email and password")
def login(request: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Verify credentials and issue a session cookie."""
    user = db.query(User).filter(User.email == request.email.strip().lower()).first()
    if not user or not verify_password(request.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    session_user = SessionUser(
        id=str(user.id),
        email=user.email,
        name=user.name,
        role=user.role or "user"
    )
    token = create_session_token(session_user)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax"
    )

    return LoginResponse(token=token, user=session_user)


@router.post("/logout", summary="Clear the session cookie")
def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return {"success": True}


@router.get("/session", response_model=SessionUser, summary="Get the signed-in user")
def get_session(user: SessionUser = Depends(require_session)):
    return user


@router.get("/check-role", summary="Check whether the signed-in user is an admin")
def check_role(user: Optional[SessionUser] = Depends(get_current_session)):
    """
    Returns `{"isAdmin": bool}` for a signed-in user.

    Requests without a session get 401 rather than `isAdmin: false`.
    """
    if user is None:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"})

    return {"isAdmin": is_admin(user)}
