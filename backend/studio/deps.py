from datetime import datetime, timezone

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from .config import settings
from .core.security import decode_session_token
from .database import get_db
from .models.user import User
from .services.storage import DatabaseStorage, Storage


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return DatabaseStorage(db)


def _aware(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def get_session_user(request: Request, storage: Storage = Depends(get_storage)) -> User | None:
    """User behind the session cookie, or None for anonymous visitors."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    sid = decode_session_token(token)
    if not sid:
        return None
    sess = storage.get_session(sid)
    if not sess:
        return None
    if _aware(sess.expires_at) <= datetime.now(timezone.utc):
        storage.delete_session(sid)
        return None
    return storage.get_user(sess.user_id)


def get_current_user(user: User | None = Depends(get_session_user)) -> User:
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user


def require_admin(user: User | None = Depends(get_session_user)) -> User:
    if not user or not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return user
