import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_storage, require_admin
from ..schemas.booking import BookingIn, BookingOut
from ..services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["booking"])


@router.post("/book", response_model=BookingOut, status_code=201)
def create_booking(payload: BookingIn, storage: Storage = Depends(get_storage)):
    # checked here so an unknown artist is a clean 400, not an FK failure
    if not storage.get_artist(payload.artist_id):
        raise HTTPException(400, "Unknown artist")

    booking = storage.create_booking(payload.model_dump())
    logger.info("Booking %s for artist %s", booking.id, booking.artist_id)
    return booking


@router.get("/admin/bookings", response_model=List[BookingOut], dependencies=[Depends(require_admin)])
def list_bookings(storage: Storage = Depends(get_storage)):
    return storage.list_bookings()
