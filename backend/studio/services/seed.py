# backend/studio/services/seed.py
"""
Default content inserted at startup.

Idempotent per block: artists only when the table is empty, about copy only
when the singleton row is still blank, the admin account only when missing
(its password is re-synced with MASTER_PASSWORD on every start).
"""
import logging

from ..config import settings
from ..core.security import hash_password, verify_password
from ..models.user import Role
from .storage import Storage

logger = logging.getLogger(__name__)

DEFAULT_ARTISTS = [
    {
        "name": "Mila",
        "slug": "mila",
        "bio": "Specializing in fine line work and delicate botanicals",
        "specialties": ["Fine Line", "Botanicals", "Minimalist"],
        "portfolio": [
            "https://images.unsplash.com/photo-1542717309-4256ee08c549",
            "https://images.unsplash.com/photo-1542717309-4256ee08c550",
            "https://images.unsplash.com/photo-1542717309-4256ee08c551",
        ],
    },
    {
        "name": "Yi",
        "slug": "yi",
        "bio": "Master of traditional Asian art and contemporary fusion",
        "specialties": ["Traditional Asian", "Contemporary", "Color Work"],
        "portfolio": [
            "https://images.unsplash.com/photo-1542717309-4256ee08c552",
            "https://images.unsplash.com/photo-1542717309-4256ee08c553",
            "https://images.unsplash.com/photo-1542717309-4256ee08c554",
        ],
    },
]

DEFAULT_ABOUT = {
    "story": (
        "Playhouse is more than just a tattoo shop: it's a creative sanctuary where art "
        "meets skin, and stories come to life through ink."
    ),
    "space": (
        "Located in the heart of the city, our studio is designed to inspire creativity "
        "and provide a comfortable, luxurious environment for our clients and artists alike."
    ),
    "philosophy": (
        "At Playhouse, we believe that every tattoo tells a story. Our artists work closely "
        "with clients to bring their visions to life, creating unique pieces that stand the test of time."
    ),
    "values": [
        {"title": "QUALITY", "description": "Uncompromising attention to detail in every piece"},
        {"title": "SAFETY", "description": "Strict sterilization and safety protocols"},
        {"title": "ARTISTRY", "description": "Continuous evolution of craft and style"},
    ],
}


def seed_artists(storage: Storage) -> int:
    """Insert the default roster if there are no artists yet. Returns how many were added."""
    if storage.list_artists():
        return 0
    for data in DEFAULT_ARTISTS:
        artist = storage.create_artist(data)
        for url in data["portfolio"]:
            storage.add_portfolio_item(artist.id, url)
    logger.info("Seeded %d artists", len(DEFAULT_ARTISTS))
    return len(DEFAULT_ARTISTS)


def seed_about(storage: Storage) -> bool:
    about = storage.get_about_content()
    if about.story or about.space or about.philosophy:
        return False
    storage.update_about_content(DEFAULT_ABOUT)
    logger.info("Seeded about page content")
    return True


def ensure_admin(storage: Storage) -> None:
    """Bootstrap admin: ADMIN_USERNAME with MASTER_PASSWORD."""
    user = storage.get_user_by_username(settings.ADMIN_USERNAME)
    if not user:
        storage.create_user(settings.ADMIN_USERNAME, hash_password(settings.MASTER_PASSWORD), Role.ADMIN)
        logger.info("Created admin account %r", settings.ADMIN_USERNAME)
        return
    if not verify_password(settings.MASTER_PASSWORD, user.password_hash):
        storage.set_user_password(user.id, hash_password(settings.MASTER_PASSWORD))
        logger.info("MASTER_PASSWORD changed, admin password re-synced")


def seed_all(storage: Storage) -> None:
    ensure_admin(storage)
    seed_artists(storage)
    seed_about(storage)


if __name__ == "__main__":
    from ..database import Base, engine, SessionLocal
    from .storage import DatabaseStorage

    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_all(DatabaseStorage(db))
