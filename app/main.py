# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Dragon Ball Character Library API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.dependencies import (
    build_character_store,
    build_configuration_service,
    build_image_resolver,
)
from app.exceptions import (
    CatalogException,
    catalog_exception_handler,
    store_unavailable_handler,
    validation_exception_handler,
)
from app.routers import characters, health
from app.routers import settings as settings_routes
from core.services.character_service import CharacterService
from lib.utils import StoreUnavailableError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup builds the single store, image resolver and services shared
    by every request. Shutdown drops them.
    """
    logger.info(f"Starting Character Library API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    store = build_character_store(settings)
    images = build_image_resolver(settings)

    app.state.character_store = store
    app.state.character_service = CharacterService(store, images)
    app.state.configuration_service = build_configuration_service(settings)

    yield

    logger.info("Shutting down Character Library API")
    del app.state.character_service
    del app.state.character_store
    del app.state.configuration_service


# Create FastAPI application
app = FastAPI(
    title="Dragon Ball Character Library API",
    description="""
## Character Catalog API

Create, read, update and delete Dragon Ball characters.

Each character carries an image URL resolved from its name
(`"Master Roshi"` -> `masterroshi/masterroshi.jpg`). Image lookups are
best-effort: if the image backend is down the character is still saved,
with `imageUrl: null`.

### Quick Start

```bash
# List characters
curl http://localhost:8000/api/characters

# Create a character
curl -X POST http://localhost:8000/api/characters \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Krillin", "race": "Human", "planet": "Earth", "transformation": "Unlock Potential", "technique": "Destructo Disc"}'

# Upload its image
curl -X POST http://localhost:8000/api/characters/6/image -F "file=@krillin.jpg;type=image/jpeg"
```
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Characters",
            "description": "Character catalog CRUD",
        },
        {
            "name": "Configuration",
            "description": "Public runtime settings",
        },
        {
            "name": "Health",
            "description": "API health and liveness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows the web frontend to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CatalogException)
async def handle_catalog_exception(request: Request, exc: CatalogException):
    """Handle custom catalog exceptions."""
    return await catalog_exception_handler(request, exc)


@app.exception_handler(StoreUnavailableError)
async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
    """Handle character store outages."""
    return await store_unavailable_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle request body/path validation failures."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)

# Character CRUD endpoints
app.include_router(
    characters.router,
    prefix="/api/characters",
    tags=["Characters"]
)

# Public configuration endpoints
app.include_router(
    settings_routes.router,
    prefix="/api/config",
    tags=["Configuration"]
)

# Locally stored images (IMAGE_BACKEND=local)
if settings.IMAGE_BACKEND == "local":
    app.mount(
        "/images",
        StaticFiles(directory=Path(settings.IMAGE_DIR), check_dir=False),
        name="images",
    )


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Dragon Ball Character Library API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/health",
    }
