from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CamelModel

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class PortfolioItemOut(CamelModel):
    id: int
    artist_id: int
    image_url: str
    title: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class ArtistOut(CamelModel):
    id: int
    name: str
    slug: str
    bio: str
    specialties: List[str]
    profile_image: Optional[str] = None
    instagram: Optional[str] = None
    experience: Optional[str] = None
    style: Optional[str] = None
    portfolio_items: List[PortfolioItemOut] = []


class ArtistCreateIn(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=SLUG_PATTERN)
    bio: str = ""
    specialties: List[str] = []
    instagram: Optional[str] = None
    experience: Optional[str] = None
    style: Optional[str] = None


class ArtistUpdateIn(CamelModel):
    """Partial update: only the keys sent are written. No slug here."""
    name: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = None
    specialties: Optional[List[str]] = None
    instagram: Optional[str] = None
    experience: Optional[str] = None
    style: Optional[str] = None
