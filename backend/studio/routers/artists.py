import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from ..deps import get_storage, require_admin
from ..schemas.artist import ArtistOut, ArtistCreateIn, ArtistUpdateIn, PortfolioItemOut
from ..services.images import InvalidImageError, save_image, remove_image
from ..services.storage import Storage, DuplicateSlugError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["artists"])

# these columns are NOT NULL: an explicit null in a PATCH is ignored
_REQUIRED_FIELDS = ("name", "bio", "specialties")


# -----------------------------------------------------------------------------
# Public
# -----------------------------------------------------------------------------
@router.get("/artists", response_model=List[ArtistOut])
def list_artists(storage: Storage = Depends(get_storage)):
    return storage.list_artists()


@router.get("/artists/{slug}", response_model=ArtistOut)
def get_artist(slug: str, storage: Storage = Depends(get_storage)):
    artist = storage.get_artist_by_slug(slug)
    if not artist:
        raise HTTPException(404, "Artist not found")
    return artist


# -----------------------------------------------------------------------------
# Admin
# -----------------------------------------------------------------------------
@router.post("/artists", response_model=ArtistOut, status_code=201, dependencies=[Depends(require_admin)])
def create_artist(payload: ArtistCreateIn, storage: Storage = Depends(get_storage)):
    try:
        artist = storage.create_artist(payload.model_dump())
    except DuplicateSlugError as e:
        raise HTTPException(409, str(e))
    logger.info("Created artist %s (%s)", artist.id, artist.slug)
    return artist


@router.patch("/artists/{artist_id}", response_model=ArtistOut, dependencies=[Depends(require_admin)])
def update_artist(artist_id: int, payload: ArtistUpdateIn, storage: Storage = Depends(get_storage)):
    fields = payload.model_dump(exclude_unset=True)
    for k in _REQUIRED_FIELDS:
        if k in fields and fields[k] is None:
            fields.pop(k)

    artist = storage.update_artist(artist_id, fields)
    if not artist:
        raise HTTPException(404, "Artist not found")
    return artist


@router.post("/artists/{artist_id}/profile-image", response_model=ArtistOut, dependencies=[Depends(require_admin)])
def upload_profile_image(
    artist_id: int,
    image: Optional[UploadFile] = File(None),
    storage: Storage = Depends(get_storage),
):
    if image is None:
        raise HTTPException(400, "No image uploaded")
    artist = storage.get_artist(artist_id)
    if not artist:
        raise HTTPException(404, "Artist not found")
    previous = artist.profile_image

    try:
        url = save_image(image, prefix=f"profile-{artist_id}")
    except InvalidImageError as e:
        raise HTTPException(400, str(e))

    artist = storage.update_artist_profile_image(artist_id, url)
    if previous and previous != url:
        remove_image(previous)
    return artist


@router.post(
    "/artists/{artist_id}/portfolio",
    response_model=List[PortfolioItemOut],
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def add_portfolio_items(
    artist_id: int,
    image: Optional[UploadFile] = File(None),
    images: Optional[List[UploadFile]] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    storage: Storage = Depends(get_storage),
):
    """
    Accepts a single `image` and/or several `images`. Files are processed one
    by one; the first invalid file aborts the whole batch (files already
    written are removed, nothing is inserted).
    """
    uploads = ([image] if image else []) + list(images or [])
    if not uploads:
        raise HTTPException(400, "No image uploaded")
    if not storage.get_artist(artist_id):
        raise HTTPException(404, "Artist not found")

    saved: list[str] = []
    try:
        for up in uploads:
            saved.append(save_image(up, prefix=f"portfolio-{artist_id}"))
    except InvalidImageError as e:
        for url in saved:
            remove_image(url)
        raise HTTPException(400, str(e))

    return [storage.add_portfolio_item(artist_id, url, title=title, description=description) for url in saved]


@router.delete("/portfolio/{item_id}", dependencies=[Depends(require_admin)])
def delete_portfolio_item(item_id: int, storage: Storage = Depends(get_storage)):
    image_url = storage.delete_portfolio_item(item_id)
    if image_url is None:
        raise HTTPException(404, "Portfolio item not found")
    remove_image(image_url)
    return {"ok": True}
