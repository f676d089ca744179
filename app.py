"""FastAPI application entry point for the Card Vote API."""
import asyncio
import logging
import time
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cardvote.constants import API_VERSION, SERVICE_NAME
from cardvote.exceptions import CardVoteError, FetchError
from cardvote.routes import banlist, system, votes
from cardvote.services.banlist_cache import BanlistCache
from cardvote.services.vote_store import VoteStore
from config import Settings, settings

# Configure logging FIRST (before creating FastAPI app)
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(),
    ]
)

# Set uvicorn logging level too
uvicorn_logger = logging.getLogger("uvicorn")
uvicorn_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

logger = logging.getLogger("cardvote.app")


async def _startup_refresh(cache: BanlistCache) -> None:
    """Best-effort initial banlist load; failures are logged and ignored."""
    try:
        await cache.refresh()
    except FetchError as e:
        logger.warning(f"Initial banlist refresh failed, starting with an empty banlist: {e.message}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Kick off the initial banlist refresh without holding up startup."""
    task = None
    if app.state.settings.banlist_refresh_on_startup:
        task = asyncio.create_task(_startup_refresh(app.state.banlist_cache))
    app.state.startup_refresh = task
    yield
    if task is not None:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task


async def log_requests(request: Request, call_next):
    """Log all HTTP requests with timing and response status."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    client_host = request.client.host if request.client else "-"
    access_logger = logging.getLogger("cardvote.access")
    access_logger.info(
        f"{client_host} {request.method} {request.url.path} "
        f"-> {response.status_code} ({process_time:.1f}ms)"
    )

    return response


async def card_vote_error_handler(request: Request, exc: CardVoteError):
    """Translate service errors into ``{"error": message}`` responses."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Return consistent HTTP error responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 with the first problem found."""
    errors = exc.errors()
    message = "Invalid request."
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    logger.debug(f"Rejected request to {request.url.path}: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler to avoid leaking stack traces."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(
    app_settings: Optional[Settings] = None,
    banlist_cache: Optional[BanlistCache] = None,
    vote_store: Optional[VoteStore] = None,
) -> FastAPI:
    """Build the application with its own banlist cache and vote store."""
    app_settings = app_settings or settings
    banlist_cache = banlist_cache or BanlistCache(settings=app_settings)
    vote_store = vote_store or VoteStore(banlist_cache)

    app = FastAPI(
        title=SERVICE_NAME,
        description="Per-format card vote leaderboards with banlist flags.",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.banlist_cache = banlist_cache
    app.state.vote_store = vote_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.include_router(system.router)
    app.include_router(votes.router)
    app.include_router(banlist.router)

    app.add_exception_handler(CardVoteError, card_vote_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app


app = create_app()

__all__ = ["app", "create_app", "lifespan"]


if __name__ == "__main__":
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
