# backend/studio/services/storage.py
"""
Persistence layer for the site.

`Storage` is the contract the routers talk to. Two implementations:
  - DatabaseStorage: SQLAlchemy session (production)
  - MemStorage: plain dicts of model instances (tests, local demos)

Both return the ORM model classes so the response schemas can read them
with from_attributes regardless of where they came from. Lookups of unknown
ids return None; the routers turn that into a 404.
"""
from __future__ import annotations

import itertools
import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core.security import new_session_id
from ..models.about import AboutContent, ABOUT_ROW_ID
from ..models.artist import Artist, PortfolioItem
from ..models.booking import Booking
from ..models.user import User, Role
from ..models.user_session import UserSession

# slug is deliberately absent: it is fixed at creation
ARTIST_FIELDS = ("name", "bio", "specialties", "instagram", "experience", "style")
ABOUT_FIELDS = ("story", "space", "philosophy", "values")


class DuplicateSlugError(ValueError):
    def __init__(self, slug: str):
        super().__init__(f"Slug already in use: {slug}")
        self.slug = slug


class DuplicateUsernameError(ValueError):
    def __init__(self, username: str):
        super().__init__(f"Username already in use: {username}")
        self.username = username


def encode_values(values: Iterable[dict] | str | None) -> str:
    """About-page value cards are stored as a JSON string."""
    if values is None:
        return "[]"
    if isinstance(values, str):
        return values
    return json.dumps([{"title": v["title"], "description": v["description"]} for v in values])


def _pick(fields: dict[str, Any], allowed: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k in allowed}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Storage(ABC):
    # --- artists ---
    @abstractmethod
    def list_artists(self) -> list[Artist]: ...

    @abstractmethod
    def get_artist(self, artist_id: int) -> Artist | None: ...

    @abstractmethod
    def get_artist_by_slug(self, slug: str) -> Artist | None: ...

    @abstractmethod
    def create_artist(self, data: dict[str, Any]) -> Artist: ...

    @abstractmethod
    def update_artist(self, artist_id: int, fields: dict[str, Any]) -> Artist | None: ...

    @abstractmethod
    def update_artist_profile_image(self, artist_id: int, url: str) -> Artist | None: ...

    # --- portfolio ---
    @abstractmethod
    def add_portfolio_item(
        self,
        artist_id: int,
        image_url: str,
        title: str | None = None,
        description: str | None = None,
    ) -> PortfolioItem | None: ...

    @abstractmethod
    def delete_portfolio_item(self, item_id: int) -> str | None:
        """Remove the item; returns its image_url, or None for an unknown id."""

    # --- bookings ---
    @abstractmethod
    def create_booking(self, data: dict[str, Any]) -> Booking: ...

    @abstractmethod
    def list_bookings(self) -> list[Booking]: ...

    # --- about page ---
    @abstractmethod
    def get_about_content(self) -> AboutContent: ...

    @abstractmethod
    def update_about_content(self, partial: dict[str, Any]) -> AboutContent: ...

    # --- users ---
    @abstractmethod
    def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_user(self, username: str, password_hash: str, role: Role = Role.MEMBER) -> User: ...

    @abstractmethod
    def set_user_password(self, user_id: int, password_hash: str) -> User | None: ...

    # --- sessions ---
    @abstractmethod
    def create_session(self, user_id: int, expires_at: datetime) -> UserSession: ...

    @abstractmethod
    def get_session(self, session_id: str) -> UserSession | None: ...

    @abstractmethod
    def delete_session(self, session_id: str) -> None: ...


# -----------------------------------------------------------------------------
# In-memory
# -----------------------------------------------------------------------------
class MemStorage(Storage):
    def __init__(self):
        self._artists: dict[int, Artist] = {}
        self._portfolio: dict[int, PortfolioItem] = {}
        self._bookings: dict[int, Booking] = {}
        self._users: dict[int, User] = {}
        self._sessions: dict[str, UserSession] = {}
        self._about: AboutContent | None = None

        self._artist_ids = itertools.count(1)
        self._portfolio_ids = itertools.count(1)
        self._booking_ids = itertools.count(1)
        self._user_ids = itertools.count(1)

    def list_artists(self) -> list[Artist]:
        return [self._artists[k] for k in sorted(self._artists)]

    def get_artist(self, artist_id: int) -> Artist | None:
        return self._artists.get(artist_id)

    def get_artist_by_slug(self, slug: str) -> Artist | None:
        return next((a for a in self._artists.values() if a.slug == slug), None)

    def create_artist(self, data: dict[str, Any]) -> Artist:
        if self.get_artist_by_slug(data["slug"]):
            raise DuplicateSlugError(data["slug"])
        artist = Artist(
            id=next(self._artist_ids),
            name=data["name"],
            slug=data["slug"],
            bio=data.get("bio") or "",
            specialties=list(data.get("specialties") or []),
            profile_image=data.get("profile_image"),
            instagram=data.get("instagram"),
            experience=data.get("experience"),
            style=data.get("style"),
        )
        self._artists[artist.id] = artist
        return artist

    def update_artist(self, artist_id: int, fields: dict[str, Any]) -> Artist | None:
        artist = self._artists.get(artist_id)
        if not artist:
            return None
        for k, v in _pick(fields, ARTIST_FIELDS).items():
            setattr(artist, k, list(v) if k == "specialties" else v)
        return artist

    def update_artist_profile_image(self, artist_id: int, url: str) -> Artist | None:
        artist = self._artists.get(artist_id)
        if not artist:
            return None
        artist.profile_image = url
        return artist

    def add_portfolio_item(self, artist_id, image_url, title=None, description=None):
        artist = self._artists.get(artist_id)
        if not artist:
            return None
        item = PortfolioItem(
            id=next(self._portfolio_ids),
            artist_id=artist_id,
            image_url=image_url,
            title=title,
            description=description,
            created_at=_now(),
        )
        artist.portfolio_items.append(item)
        self._portfolio[item.id] = item
        return item

    def delete_portfolio_item(self, item_id: int) -> str | None:
        item = self._portfolio.pop(item_id, None)
        if not item:
            return None
        artist = self._artists.get(item.artist_id)
        if artist and item in artist.portfolio_items:
            artist.portfolio_items.remove(item)
        return item.image_url

    def create_booking(self, data: dict[str, Any]) -> Booking:
        booking = Booking(
            id=next(self._booking_ids),
            name=data["name"],
            email=data["email"],
            artist_id=data["artist_id"],
            message=data["message"],
            date=data["date"],
            created_at=_now(),
        )
        self._bookings[booking.id] = booking
        return booking

    def list_bookings(self) -> list[Booking]:
        return [self._bookings[k] for k in sorted(self._bookings, reverse=True)]

    def get_about_content(self) -> AboutContent:
        if self._about is None:
            self._about = AboutContent(
                id=ABOUT_ROW_ID, story="", space="", philosophy="", values="[]", updated_at=_now()
            )
        return self._about

    def update_about_content(self, partial: dict[str, Any]) -> AboutContent:
        about = self.get_about_content()
        for k, v in _pick(partial, ABOUT_FIELDS).items():
            setattr(about, k, encode_values(v) if k == "values" else v)
        about.updated_at = _now()
        return about

    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, username: str, password_hash: str, role: Role = Role.MEMBER) -> User:
        if self.get_user_by_username(username):
            raise DuplicateUsernameError(username)
        user = User(
            id=next(self._user_ids),
            username=username,
            password_hash=password_hash,
            role=role,
            created_at=_now(),
        )
        self._users[user.id] = user
        return user

    def set_user_password(self, user_id: int, password_hash: str) -> User | None:
        user = self._users.get(user_id)
        if not user:
            return None
        user.password_hash = password_hash
        return user

    def create_session(self, user_id: int, expires_at: datetime) -> UserSession:
        s = UserSession(id=new_session_id(), user_id=user_id, expires_at=expires_at, created_at=_now())
        self._sessions[s.id] = s
        return s

    def get_session(self, session_id: str) -> UserSession | None:
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


# -----------------------------------------------------------------------------
# SQLAlchemy
# -----------------------------------------------------------------------------
class DatabaseStorage(Storage):
    def __init__(self, db: Session):
        self.db = db

    def _artists_query(self):
        return self.db.query(Artist).options(selectinload(Artist.portfolio_items))

    def list_artists(self) -> list[Artist]:
        return self._artists_query().order_by(Artist.id.asc()).all()

    def get_artist(self, artist_id: int) -> Artist | None:
        return self._artists_query().filter(Artist.id == artist_id).first()

    def get_artist_by_slug(self, slug: str) -> Artist | None:
        return self._artists_query().filter(Artist.slug == slug).first()

    def create_artist(self, data: dict[str, Any]) -> Artist:
        if self.db.query(Artist.id).filter(Artist.slug == data["slug"]).first():
            raise DuplicateSlugError(data["slug"])
        artist = Artist(
            name=data["name"],
            slug=data["slug"],
            bio=data.get("bio") or "",
            specialties=list(data.get("specialties") or []),
            profile_image=data.get("profile_image"),
            instagram=data.get("instagram"),
            experience=data.get("experience"),
            style=data.get("style"),
        )
        self.db.add(artist)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race on the unique slug
            self.db.rollback()
            raise DuplicateSlugError(data["slug"])
        self.db.refresh(artist)
        return artist

    def update_artist(self, artist_id: int, fields: dict[str, Any]) -> Artist | None:
        artist = self.get_artist(artist_id)
        if not artist:
            return None
        for k, v in _pick(fields, ARTIST_FIELDS).items():
            setattr(artist, k, list(v) if k == "specialties" else v)
        self.db.commit()
        return artist

    def update_artist_profile_image(self, artist_id: int, url: str) -> Artist | None:
        artist = self.get_artist(artist_id)
        if not artist:
            return None
        artist.profile_image = url
        self.db.commit()
        return artist

    def add_portfolio_item(self, artist_id, image_url, title=None, description=None):
        if not self.db.get(Artist, artist_id):
            return None
        item = PortfolioItem(artist_id=artist_id, image_url=image_url, title=title, description=description)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_portfolio_item(self, item_id: int) -> str | None:
        item = self.db.get(PortfolioItem, item_id)
        if not item:
            return None
        image_url = item.image_url
        # delete-orphan: dropping it from the collection deletes the row and
        # keeps an already loaded artist in sync
        item.artist.portfolio_items.remove(item)
        self.db.commit()
        return image_url

    def create_booking(self, data: dict[str, Any]) -> Booking:
        booking = Booking(
            name=data["name"],
            email=data["email"],
            artist_id=data["artist_id"],
            message=data["message"],
            date=data["date"],
        )
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def list_bookings(self) -> list[Booking]:
        return self.db.query(Booking).order_by(Booking.id.desc()).all()

    def get_about_content(self) -> AboutContent:
        about = self.db.get(AboutContent, ABOUT_ROW_ID)
        if about:
            return about
        about = AboutContent(id=ABOUT_ROW_ID, story="", space="", philosophy="", values="[]")
        self.db.add(about)
        try:
            self.db.commit()
        except IntegrityError:
            # created concurrently by another request
            self.db.rollback()
            return self.db.get(AboutContent, ABOUT_ROW_ID)
        self.db.refresh(about)
        return about

    def update_about_content(self, partial: dict[str, Any]) -> AboutContent:
        about = self.get_about_content()
        for k, v in _pick(partial, ABOUT_FIELDS).items():
            setattr(about, k, encode_values(v) if k == "values" else v)
        self.db.commit()
        self.db.refresh(about)
        return about

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def create_user(self, username: str, password_hash: str, role: Role = Role.MEMBER) -> User:
        user = User(username=username, password_hash=password_hash, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateUsernameError(username)
        self.db.refresh(user)
        return user

    def set_user_password(self, user_id: int, password_hash: str) -> User | None:
        user = self.db.get(User, user_id)
        if not user:
            return None
        user.password_hash = password_hash
        self.db.commit()
        return user

    def create_session(self, user_id: int, expires_at: datetime) -> UserSession:
        s = UserSession(id=new_session_id(), user_id=user_id, expires_at=expires_at)
        self.db.add(s)
        self.db.commit()
        return s

    def get_session(self, session_id: str) -> UserSession | None:
        return self.db.get(UserSession, session_id)

    def delete_session(self, session_id: str) -> None:
        self.db.query(UserSession).filter(UserSession.id == session_id).delete(synchronize_session=False)
        self.db.commit()
