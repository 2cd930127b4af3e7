# =============================================================================
# backend/tests/conftest.py
# =============================================================================
# Environment is set BEFORE importing studio.*: studio.config builds the
# settings object at import time.
# =============================================================================

import io
import os
import tempfile

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("MASTER_PASSWORD", "test-master-password")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="studio-uploads-"))
os.environ.pop("OPENAI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from studio.config import settings
from studio.deps import get_storage
from studio.main import app
from studio.services.seed import seed_all
from studio.services.storage import MemStorage


def image_bytes(width=10, height=10, fmt="PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), "red").save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def storage():
    """Seeded in-memory storage: admin account, Mila + Yi, about copy."""
    s = MemStorage()
    seed_all(s)
    return s


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    r = client.post("/api/login", json={"password": settings.MASTER_PASSWORD})
    assert r.status_code == 200
    return client


@pytest.fixture
def make_image():
    return image_bytes
