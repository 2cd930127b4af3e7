from pathlib import Path

from studio.config import settings


def _uploaded_files() -> set[str]:
    return {p.name for p in Path(settings.UPLOAD_DIR).iterdir()}


# -----------------------------------------------------------------------------
# Public reads
# -----------------------------------------------------------------------------
def test_list_artists_includes_portfolio(client):
    r = client.get("/api/artists")
    assert r.status_code == 200
    artists = r.json()
    assert [a["slug"] for a in artists] == ["mila", "yi"]

    mila = artists[0]
    assert mila["specialties"] == ["Fine Line", "Botanicals", "Minimalist"]
    assert mila["profileImage"] is None
    assert len(mila["portfolioItems"]) == 3
    assert set(mila["portfolioItems"][0]) >= {"id", "artistId", "imageUrl", "title", "createdAt"}


def test_get_artist_by_slug(client):
    r = client.get("/api/artists/yi")
    assert r.status_code == 200
    assert r.json()["name"] == "Yi"


def test_unknown_slug_is_404(client):
    assert client.get("/api/artists/nobody").status_code == 404


# -----------------------------------------------------------------------------
# Admin edits
# -----------------------------------------------------------------------------
def test_patch_artist_fields(admin_client):
    r = admin_client.patch("/api/artists/1", json={"bio": "New bio", "specialties": ["Blackwork"], "instagram": "@mila"})
    assert r.status_code == 200
    body = r.json()
    assert body["bio"] == "New bio"
    assert body["specialties"] == ["Blackwork"]
    assert body["instagram"] == "@mila"
    assert body["name"] == "Mila"

    assert admin_client.get("/api/artists/mila").json()["bio"] == "New bio"


def test_patch_cannot_change_slug(admin_client):
    r = admin_client.patch("/api/artists/1", json={"slug": "renamed", "bio": "x"})
    assert r.status_code == 200
    assert r.json()["slug"] == "mila"
    assert admin_client.get("/api/artists/renamed").status_code == 404


def test_patch_null_name_is_ignored(admin_client):
    r = admin_client.patch("/api/artists/1", json={"name": None, "bio": "still Mila"})
    assert r.status_code == 200
    assert r.json()["name"] == "Mila"


def test_patch_unknown_artist_is_404(admin_client):
    assert admin_client.patch("/api/artists/999", json={"bio": "x"}).status_code == 404


def test_patch_bad_specialties_is_400(admin_client):
    assert admin_client.patch("/api/artists/1", json={"specialties": "Blackwork"}).status_code == 400


def test_create_artist(admin_client):
    r = admin_client.post("/api/artists", json={"name": "Nova", "slug": "nova", "specialties": ["Dotwork"]})
    assert r.status_code == 201
    assert r.json()["portfolioItems"] == []
    assert admin_client.get("/api/artists/nova").status_code == 200


def test_create_artist_duplicate_slug_is_409(admin_client):
    r = admin_client.post("/api/artists", json={"name": "Other Mila", "slug": "mila"})
    assert r.status_code == 409


def test_create_artist_invalid_slug_is_400(admin_client):
    r = admin_client.post("/api/artists", json={"name": "Nova", "slug": "Not A Slug"})
    assert r.status_code == 400


# -----------------------------------------------------------------------------
# Uploads
# -----------------------------------------------------------------------------
def test_profile_image_upload(admin_client, make_image):
    r = admin_client.post(
        "/api/artists/1/profile-image",
        files={"image": ("me.png", make_image(), "image/png")},
    )
    assert r.status_code == 200
    url = r.json()["profileImage"]
    assert url.startswith("/uploads/profile-1-") and url.endswith(".png")

    served = admin_client.get(url)
    assert served.status_code == 200


def test_profile_image_rejects_non_image(admin_client):
    r = admin_client.post(
        "/api/artists/1/profile-image",
        files={"image": ("notes.txt", b"definitely not a picture", "text/plain")},
    )
    assert r.status_code == 400
    assert admin_client.get("/api/artists/mila").json()["profileImage"] is None


def test_profile_image_without_file_is_400(admin_client):
    assert admin_client.post("/api/artists/1/profile-image").status_code == 400


def test_profile_image_unknown_artist_is_404(admin_client, make_image):
    r = admin_client.post(
        "/api/artists/999/profile-image",
        files={"image": ("me.png", make_image(), "image/png")},
    )
    assert r.status_code == 404


def test_profile_image_requires_admin(client, make_image):
    r = client.post(
        "/api/artists/1/profile-image",
        files={"image": ("me.png", make_image(), "image/png")},
    )
    assert r.status_code == 403


def test_large_upload_is_downsized(admin_client, make_image):
    from PIL import Image

    r = admin_client.post(
        "/api/artists/2/profile-image",
        files={"image": ("wide.jpg", make_image(2400, 1200, "JPEG"), "image/jpeg")},
    )
    assert r.status_code == 200
    name = r.json()["profileImage"].rsplit("/", 1)[-1]
    with Image.open(Path(settings.UPLOAD_DIR) / name) as img:
        assert img.size == (settings.IMAGE_MAX_WIDTH, 600)


def test_oversized_image_is_400(admin_client, make_image, monkeypatch):
    from PIL import Image

    # anything over twice this many pixels is refused by Pillow outright
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    r = admin_client.post(
        "/api/artists/1/profile-image",
        files={"image": ("huge.png", make_image(100, 100), "image/png")},
    )
    assert r.status_code == 400
    assert "too large" in r.json()["detail"]
    assert admin_client.get("/api/artists/mila").json()["profileImage"] is None


def test_replacing_profile_image_removes_old_file(admin_client, make_image):
    first = admin_client.post(
        "/api/artists/1/profile-image",
        files={"image": ("a.png", make_image(), "image/png")},
    ).json()["profileImage"]
    second = admin_client.post(
        "/api/artists/1/profile-image",
        files={"image": ("b.png", make_image(), "image/png")},
    ).json()["profileImage"]

    assert first != second
    assert admin_client.get(first).status_code == 404
    assert admin_client.get(second).status_code == 200


def test_add_portfolio_items_batch(admin_client, make_image):
    r = admin_client.post(
        "/api/artists/2/portfolio",
        files=[
            ("images", ("a.png", make_image(), "image/png")),
            ("images", ("b.png", make_image(), "image/png")),
        ],
        data={"title": "Koi sleeve"},
    )
    assert r.status_code == 201
    items = r.json()
    assert len(items) == 2
    assert all(i["artistId"] == 2 and i["title"] == "Koi sleeve" for i in items)
    assert len(admin_client.get("/api/artists/yi").json()["portfolioItems"]) == 5


def test_add_single_portfolio_item(admin_client, make_image):
    r = admin_client.post(
        "/api/artists/1/portfolio",
        files={"image": ("a.png", make_image(), "image/png")},
    )
    assert r.status_code == 201
    assert len(r.json()) == 1


def test_portfolio_batch_aborts_on_bad_file(admin_client, make_image):
    before = _uploaded_files()
    r = admin_client.post(
        "/api/artists/2/portfolio",
        files=[
            ("images", ("a.png", make_image(), "image/png")),
            ("images", ("b.txt", b"nope", "text/plain")),
        ],
    )
    assert r.status_code == 400
    assert len(admin_client.get("/api/artists/yi").json()["portfolioItems"]) == 3
    assert _uploaded_files() == before


def test_delete_portfolio_item(admin_client):
    item_id = admin_client.get("/api/artists/mila").json()["portfolioItems"][0]["id"]

    r = admin_client.delete(f"/api/portfolio/{item_id}")
    assert r.status_code == 200

    ids = [p["id"] for p in admin_client.get("/api/artists/mila").json()["portfolioItems"]]
    assert item_id not in ids
    assert len(ids) == 2


def test_delete_unknown_portfolio_item_is_404(admin_client):
    assert admin_client.delete("/api/portfolio/999").status_code == 404


def test_delete_uploaded_portfolio_item_removes_file(admin_client, make_image):
    item = admin_client.post(
        "/api/artists/1/portfolio",
        files={"image": ("a.png", make_image(), "image/png")},
    ).json()[0]
    assert admin_client.get(item["imageUrl"]).status_code == 200

    assert admin_client.delete(f"/api/portfolio/{item['id']}").status_code == 200
    assert admin_client.get(item["imageUrl"]).status_code == 404
