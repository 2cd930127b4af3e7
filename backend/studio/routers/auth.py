import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from ..config import settings
from ..core.security import verify_password, create_session_token, decode_session_token, session_expiry
from ..deps import get_storage, get_current_user
from ..models.user import User
from ..schemas.auth import LoginIn, UserOut
from ..services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_MIN * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post("/login", response_model=UserOut)
def login(payload: LoginIn, response: Response, storage: Storage = Depends(get_storage)):
    username = payload.username or settings.ADMIN_USERNAME
    user = storage.get_user_by_username(username)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %r", username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    sess = storage.create_session(user.id, session_expiry())
    _set_session_cookie(response, create_session_token(sess.id, sess.expires_at))
    return user


@router.post("/logout")
def logout(request: Request, response: Response, storage: Storage = Depends(get_storage)):
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    sid = decode_session_token(token) if token else None
    if sid:
        storage.delete_session(sid)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return {"ok": True}


@router.get("/user", response_model=UserOut)
def me(current: User = Depends(get_current_user)):
    return current
