# backend/studio/schemas/booking.py
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from .common import CamelModel


class BookingIn(CamelModel):
    """Public booking form."""
    name: str = Field(min_length=1)
    email: EmailStr
    artist_id: int
    message: str = Field(min_length=1)
    date: datetime


class BookingOut(CamelModel):
    id: int
    name: str
    email: str
    artist_id: int
    message: str
    date: datetime
    created_at: Optional[datetime] = None
