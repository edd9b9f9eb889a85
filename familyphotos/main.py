"""Family Photos Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from familyphotos.config import APP_VERSION, settings
from familyphotos.errors import AlbumError, NotFound

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the storage root exists."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings.ensure_dirs()
    logger.info("%s serving uploads from %s", settings.app_name, settings.uploads_dir)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Personal photo albums: users own albums, albums own photos",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS - allow all origins, the UI may be served from anywhere on the LAN
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error responses: always {"error": message} ---
@app.exception_handler(AlbumError)
async def album_error_handler(request: Request, exc: AlbumError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        loc = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid request: {errors[0].get('msg', 'bad input')}"
        if loc:
            message = f"{message} ({loc})"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Server error"})


# --- Register API routers ---
from familyphotos.api.users import router as users_router  # noqa: E402
from familyphotos.api.albums import router as albums_router  # noqa: E402
from familyphotos.api.photos import router as photos_router  # noqa: E402
from familyphotos.api.system import router as system_router  # noqa: E402

API_PREFIX = "/api"

app.include_router(users_router, prefix=API_PREFIX)
app.include_router(albums_router, prefix=API_PREFIX)
app.include_router(photos_router, prefix=API_PREFIX)
app.include_router(system_router, prefix=API_PREFIX)


@app.get("/api/health")
def health():
    return {"status": "ok"}


# --- Uploaded files ---
app.mount("/uploads", StaticFiles(directory=str(settings.uploads_dir)), name="uploads")


# --- Web Frontend (registered last) ---
@app.get("/{path:path}", include_in_schema=False)
def web_spa(path: str = ""):
    """Serve files from the public dir, falling back to the SPA index.html."""
    if path == "api" or path.startswith("api/"):
        raise NotFound("Not found")

    public_dir = settings.public_dir.resolve()
    if path:
        target = (public_dir / path).resolve()
        if target.is_relative_to(public_dir) and target.is_file():
            return FileResponse(str(target))

    index = public_dir / "index.html"
    if not index.is_file():
        raise NotFound("Not found")
    return FileResponse(str(index))


def run() -> None:
    """Start the server with uvicorn using host/port from settings."""
    import uvicorn

    uvicorn.run(
        "familyphotos.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
