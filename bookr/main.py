import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bookr.core.config import settings
from bookr.core.exception_handler import register_exception_handlers
from bookr.core.logging_config import setup_logging
from bookr.core.middleware import register_middlewares
from bookr.db.store import InMemoryStore
from bookr.services.cover_recognition import create_book_info_extractor

# Routers
from bookr.api.v1.endpoints import admin, auth, book, tag, user

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    # Startup: build the store and the cover extractor
    store = InMemoryStore()
    await store.connect(seed=settings.SEED_FIXTURES)
    app.state.store = store
    app.state.book_info_extractor = create_book_info_extractor(settings)

    yield

    # Shutdown
    await app.state.book_info_extractor.aclose()
    await store.disconnect()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan,
    )

    # Register all middleware
    register_middlewares(app)

    # Register all exception handlers
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(admin.router)
    app.include_router(book.router)
    app.include_router(tag.router)

    return app


app = create_application()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
