# backend/studio/services/images.py
import io
import logging
import uuid
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import settings

logger = logging.getLogger(__name__)

# Pillow format -> file extension. Anything else is re-encoded as JPEG.
_KEEP_FORMATS = {
    "JPEG": "jpg",
    "PNG": "png",
    "WEBP": "webp",
}


class InvalidImageError(ValueError):
    """The upload is not a decodable image."""


def upload_dir() -> Path:
    p = Path(settings.UPLOAD_DIR)
    p.mkdir(parents=True, exist_ok=True)
    return p


def public_url(filename: str) -> str:
    return f"/uploads/{filename}"


def _load(raw: bytes, name: str) -> Image.Image:
    if not raw:
        raise InvalidImageError(f"{name}: empty file")
    try:
        # verify() leaves the image unusable, so open twice
        with Image.open(io.BytesIO(raw)) as probe:
            probe.verify()
        img = Image.open(io.BytesIO(raw))
        img.load()
    except Image.DecompressionBombError as e:
        raise InvalidImageError(f"{name}: image dimensions too large") from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError(f"{name}: not a valid image") from e
    return img


def _save_kwargs(fmt: str) -> dict:
    if fmt == "JPEG":
        return {"quality": settings.IMAGE_QUALITY, "optimize": True}
    if fmt == "PNG":
        return {"optimize": True, "compress_level": 9}
    return {"quality": settings.IMAGE_QUALITY}


def save_image(upload: UploadFile, prefix: str) -> str:
    """
    Validate, auto-rotate (EXIF), downsize to IMAGE_MAX_WIDTH and write the
    image under UPLOAD_DIR with a generated name.
    Returns the public URL (/uploads/<name>). Raises InvalidImageError.
    """
    name = upload.filename or "upload"
    raw = upload.file.read()
    img = _load(raw, name)
    source_format = img.format

    img = ImageOps.exif_transpose(img)
    if img.width > settings.IMAGE_MAX_WIDTH:
        ratio = settings.IMAGE_MAX_WIDTH / img.width
        img = img.resize((settings.IMAGE_MAX_WIDTH, max(1, round(img.height * ratio))), Image.LANCZOS)

    fmt = source_format if source_format in _KEEP_FORMATS else "JPEG"
    if fmt == "JPEG" and img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    filename = f"{prefix}-{uuid.uuid4().hex}.{_KEEP_FORMATS[fmt]}"
    img.save(upload_dir() / filename, format=fmt, **_save_kwargs(fmt))
    logger.info("Stored upload %s as %s (%dx%d)", name, filename, img.width, img.height)
    return public_url(filename)


def remove_image(url: str) -> None:
    """Best-effort cleanup of a file written by save_image."""
    if not url.startswith("/uploads/"):
        return
    path = upload_dir() / url.rsplit("/", 1)[-1]
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove %s: %s", path, e)
