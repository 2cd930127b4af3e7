from fastapi.testclient import TestClient

from studio.config import settings
from studio.deps import get_storage
from studio.main import app
from studio.services.storage import MemStorage


def test_ping(client):
    assert client.get("/ping").json() == {"ok": True}


def test_short_urls_redirect(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/frontend/index.html"

    r = client.get("/artists/mila", follow_redirects=False)
    assert r.headers["location"] == "/frontend/artist.html?slug=mila"


def test_frontend_is_served(client):
    r = client.get("/frontend/index.html")
    assert r.status_code == 200
    assert "/api/artists" in r.text


def test_unexpected_error_is_500():
    class BrokenStorage(MemStorage):
        def list_artists(self):
            raise RuntimeError("database went away")

    app.dependency_overrides[get_storage] = lambda: BrokenStorage()
    try:
        c = TestClient(app, raise_server_exceptions=False)
        r = c.get("/api/artists")
    finally:
        app.dependency_overrides.clear()
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_startup_creates_schema_and_seeds():
    # real DatabaseStorage on the in-memory SQLite engine
    app.dependency_overrides.clear()
    with TestClient(app) as c:
        artists = c.get("/api/artists").json()
        assert [a["slug"] for a in artists] == ["mila", "yi"]
        assert c.get("/api/about").json()["values"]
        assert c.post("/api/login", json={"password": settings.MASTER_PASSWORD}).status_code == 200
        assert c.get("/api/user").json()["isAdmin"] == "true"
