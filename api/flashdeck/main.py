from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path
import logging
import traceback
from flashdeck.core.config import settings
from flashdeck.core.database import init_db
from flashdeck.core.exceptions import (
    FlashdeckException,
    ValidationError,
    NotFoundError,
    ConflictError,
    AuthenticationError,
)
from flashdeck.schemas.common import failure

# Import models to register them (and their triggers) with SQLModel
from flashdeck import models  # noqa: F401

from flashdeck.api import api_router
from flashdeck import pages

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Flashdeck", version="1.0.0")


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances, which JSON cannot carry
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with full details for debugging."""
    logger.error(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            **failure("Request validation failed"),
            "detail": jsonable_errors(exc),
        },
    )


@app.exception_handler(FlashdeckException)
async def flashdeck_exception_handler(request: Request, exc: FlashdeckException):
    """Handle custom application exceptions."""
    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, AuthenticationError):
        status_code = status.HTTP_401_UNAUTHORIZED
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.warning(f"Application exception on {request.method} {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(status_code=status_code, content=failure(str(exc)))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and answer with the error envelope."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)

    if settings.is_development:
        content = failure(f"{type(exc).__name__}: {exc}")
        content["traceback"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    else:
        content = failure("An internal server error occurred. Please try again later.")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    init_db()


@app.get("/health")
async def health():
    return {"status": "healthy"}


app.include_router(api_router, prefix=settings.api_prefix)
app.include_router(pages.router)

# Use ASSETS_PATH if configured, otherwise use api/assets
if settings.assets_path:
    assets_dir = Path(settings.assets_path)
else:
    assets_dir = Path(__file__).parent.parent / "assets"

assets_dir.mkdir(parents=True, exist_ok=True)
logger.info(f"Mounting static files from: {assets_dir}")
app.mount("/assets", StaticFiles(directory=str(assets_dir)), name="assets")
