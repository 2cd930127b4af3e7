from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings


def _make_engine():
    # SQLite (local runs / tests): connections are used from the threadpool;
    # an in-memory database only exists on a single shared connection
    if settings.DB_URL.startswith("sqlite"):
        in_memory = settings.DB_URL in ("sqlite://", "sqlite:///:memory:")
        return create_engine(
            settings.DB_URL,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool if in_memory else None,
        )

    # Dev: no pool, connection closed right after each request
    if not settings.is_production:
        return create_engine(
            settings.DB_URL,
            future=True,
            pool_pre_ping=True,
            poolclass=NullPool,
        )

    # Prod: small, conservative pool
    return create_engine(
        settings.DB_URL,
        future=True,
        pool_pre_ping=True,
        pool_size=2,
        max_overflow=0,
        pool_recycle=1800,
    )

engine = _make_engine()

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()  # releases the connection
