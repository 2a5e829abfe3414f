"""
Burger Boots Backend — FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn burgerboots.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌───────────┐   │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS      │   │
    │  └──────────┘ └──────────┘ └──────┘ └───────────┘   │
    │                                                     │
    │  Routes:                                            │
    │  /api/products  /api/blogs  /uploads  /health  /    │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ 413 │ 415 │ 500/503│
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → storage directory → log configuration summary
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from burgerboots import __version__
from burgerboots.config import settings
from burgerboots.database import dispose_engine
from burgerboots.exceptions import (
    BurgerBootsError,
    InternalError,
    NotFoundError,
    PayloadTooLargeError,
    ServiceUnavailableError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from burgerboots.middleware.logging import RequestLoggingMiddleware
from burgerboots.middleware.request_id import RequestIDMiddleware, request_id_var
from burgerboots.routes import blogs, health, media, products
from burgerboots.services.media_store import media_store

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before anything else logs.
    Format: 2024-01-15T12:00:00 [INFO] burgerboots.services.record_store: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Burger Boots API starting up...")

    media_store.ensure_storage_root()
    logger.info("Media storage: %s (served at %s)", media_store.storage_root, settings.media_url_prefix)
    logger.info("Blog categories: %s", ", ".join(settings.blog_categories_list))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Burger Boots API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    exc: BurgerBootsError,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
) -> JSONResponse:
    """
    Builds the error envelope:
        {"error": code, "message": text, ...exc.payload(), "requestId": id}
    """
    content = {
        "error": exc.error_code,
        "message": message or exc.message,
        **exc.payload(),
        "requestId": request_id_var.get(""),
    }
    return JSONResponse(status_code=status_code or exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy (most specific registered class wins):
        ValidationError (+ missing field, category, pagination) → 400
        NotFoundError                                           → 404
        PayloadTooLargeError                                    → 413
        UnsupportedMediaTypeError                               → 415
        InternalError (storage, database)                       → 500
        ServiceUnavailableError                                 → 503
        BurgerBootsError (base)                                 → its status_code
        Exception (fallback)                                    → 500

    Internal details (paths, SQL, driver errors) stay in `exc.context` and
    the server log; they are never part of a response.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(exc)

    @app.exception_handler(PayloadTooLargeError)
    async def handle_payload_too_large(request: Request, exc: PayloadTooLargeError):
        logger.warning("[%s] Upload rejected: %s | %s", request_id_var.get(""), exc.message, exc.context)
        return error_response(exc)

    @app.exception_handler(UnsupportedMediaTypeError)
    async def handle_unsupported_media(request: Request, exc: UnsupportedMediaTypeError):
        logger.warning("[%s] Upload rejected: %s", request_id_var.get(""), exc.message)
        return error_response(exc)

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        logger.error(
            "[%s] %s: %s | Context: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return error_response(exc)

    @app.exception_handler(ServiceUnavailableError)
    async def handle_service_unavailable(request: Request, exc: ServiceUnavailableError):
        logger.error("[%s] Store unavailable: %s", request_id_var.get(""), exc.context)
        return error_response(exc)

    @app.exception_handler(BurgerBootsError)
    async def handle_app_error(request: Request, exc: BurgerBootsError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "requestId": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assembles middleware, exception handlers and routers into a FastAPI app."""
    app = FastAPI(
        title="Burger Boots API",
        description=(
            "Products and blog posts for the Burger Boots shop: paginated listings "
            "with filtering, and CRUD with optional image uploads."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(blogs.router)
    app.include_router(media.router)
    app.include_router(health.router)

    @app.get("/", tags=["Health"], summary="Service banner")
    async def root() -> dict:
        return {
            "message": "Burger Boots API server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()
