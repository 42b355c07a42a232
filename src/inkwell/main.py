# src/inkwell/main.py
"""Main entry point for the Inkwell application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from inkwell.api.v1 import (
    articles_router,
    auth_router,
    comments_router,
    search_router,
    users_router,
)
from inkwell.core.errors import AUTH_ERRORS, InkwellError
from inkwell.core.settings import settings
from inkwell.db.session import get_store

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("inkwell")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Respect dependency overrides so tests never touch the configured data dir.
    store = app.dependency_overrides.get(get_store, get_store)()
    store.ensure_collections()
    logger.info("Data stored in: %s", store.data_dir)
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Inkwell API",
    description="Publishing and blogging API backed by flat JSON collections",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


@app.exception_handler(InkwellError)
async def inkwell_error_handler(request: Request, exc: InkwellError) -> JSONResponse:
    """Render domain errors as ``{"detail": ...}`` with their status code."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AUTH_ERRORS) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(articles_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(search_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inkwell.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
