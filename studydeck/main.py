import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from pymongo.errors import PyMongoError

from studydeck.core.config import (
    APP_TITLE,
    APP_VERSION,
    APP_DESCRIPTION,
    LOG_LEVEL,
)
from studydeck.core.database import db, ensure_indexes
from studydeck.api.deps import NotAuthenticated, redirect
from studydeck.api.routes import (
    auth,
    pages,
    sets,
    folders,
)
from studydeck.services.cascade import sweep_orphaned_flashcards

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await ensure_indexes(db)
        # Finish any cascade delete interrupted before the last shutdown
        await sweep_orphaned_flashcards(db)
        logger.info("✅ Connected to MongoDB!")
    except PyMongoError as e:
        logger.error(f"❌ MongoDB connection error: {e}")
    yield


app = FastAPI(
    title=APP_TITLE,
    version=APP_VERSION,
    description=APP_DESCRIPTION,
    lifespan=lifespan,
)


@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    return redirect("/")


# Include routers
app.include_router(pages.router)
app.include_router(auth.router)
app.include_router(sets.router)
app.include_router(folders.router)

# Local development:
# uvicorn studydeck.main:app --host 0.0.0.0 --port 8000 --reload
