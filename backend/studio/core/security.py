from datetime import datetime, timedelta, timezone
import secrets
from jose import jwt, JWTError
from passlib.context import CryptContext
from ..config import settings

ALGO = "HS256"
pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(p: str) -> str:
    return pwd.hash(p)

def verify_password(p: str, hashed: str) -> bool:
    return pwd.verify(p, hashed)

def new_session_id() -> str:
    return secrets.token_urlsafe(32)

def session_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=settings.SESSION_MAX_AGE_MIN)

def create_session_token(session_id: str, expires_at: datetime) -> str:
    payload = {"sid": session_id, "exp": expires_at}
    return jwt.encode(payload, settings.SESSION_SECRET, algorithm=ALGO)

def decode_session_token(token: str) -> str | None:
    """Session id carried by a cookie value, or None if forged/expired."""
    try:
        data = jwt.decode(token, settings.SESSION_SECRET, algorithms=[ALGO])
    except JWTError:
        return None
    sid = data.get("sid")
    return sid if isinstance(sid, str) and sid else None
