# backend/studio/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import quote

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from .config import settings
from .database import Base, engine, SessionLocal
from .routers import about as about_router
from .routers import artists as artists_router
from .routers import auth as auth_router
from .routers import booking as booking_router
from .routers import chat as chat_router
from .services.images import upload_dir
from .services.seed import seed_all
from .services.storage import DatabaseStorage

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def init_db():
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_all(DatabaseStorage(db))


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Started in %s mode", settings.APP_ENV)
    yield


app = FastAPI(title="Playhouse Tattoo", docs_url=None, redoc_url=None, lifespan=lifespan)


# --- Errors ---
@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # malformed input is a 400 across the API
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# --- API Routers ---
app.include_router(auth_router.router)
app.include_router(artists_router.router)
app.include_router(booking_router.router)
app.include_router(about_router.router)
app.include_router(chat_router.router)

# --- Uploaded images ---
app.mount("/uploads", StaticFiles(directory=str(upload_dir())), name="uploads")

# --- Static frontend ---
FRONTEND_DIR = Path(__file__).resolve().parents[2] / "frontend"
if FRONTEND_DIR.is_dir():
    app.mount("/frontend", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="frontend")


# --- Short URLs (redirect) ---
@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse("/frontend/index.html", status_code=302)

@app.get("/artists", include_in_schema=False)
def artists_redirect():
    return RedirectResponse("/frontend/index.html#artists", status_code=302)

@app.get("/artists/{slug}", include_in_schema=False)
def artist_redirect(slug: str):
    return RedirectResponse(f"/frontend/artist.html?slug={quote(slug)}", status_code=302)

@app.get("/book", include_in_schema=False)
def book_redirect():
    return RedirectResponse("/frontend/book.html", status_code=302)

@app.get("/about", include_in_schema=False)
def about_redirect():
    return RedirectResponse("/frontend/about.html", status_code=302)

@app.get("/admin", include_in_schema=False)
@app.get("/auth", include_in_schema=False)
def admin_redirect():
    return RedirectResponse("/frontend/admin.html", status_code=302)

@app.get("/ping")
def ping():
    return {"ok": True}
