import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from pymongo.errors import PyMongoError

from studydeck.api.deps import get_optional_user, redirect, require_user
from studydeck.core.config import APP_VERSION
from studydeck.core.database import get_db
from studydeck.core.templates import templates
from studydeck.models.flashcard import DashboardSetItem
from studydeck.repositories.flashcard_repository import FlashcardRepository
from studydeck.repositories.flashcard_set_repository import FlashcardSetRepository
from studydeck.repositories.folder_repository import FolderRepository

router = APIRouter(tags=["pages"])
logger = logging.getLogger(__name__)


@router.get("/", response_class=HTMLResponse, summary="Landing page")
async def index(request: Request, user=Depends(get_optional_user)):
    return templates.TemplateResponse(request, "index.html", {"user": user})


@router.get("/dashboard", response_class=HTMLResponse, summary="List the user's sets and folders")
async def dashboard(request: Request, user=Depends(require_user), db=Depends(get_db)):
    try:
        sets = await FlashcardSetRepository(db).list_for_user(user.id)
        folders = await FolderRepository(db).list_for_user(user.id)

        # A set may still point at a folder that no longer exists
        folders_by_id = {folder.id: folder for folder in folders}
        card_repo = FlashcardRepository(db)

        set_items = []
        for flashcard_set in sets:
            set_items.append(DashboardSetItem(
                id=flashcard_set.id,
                title=flashcard_set.title,
                created_at=flashcard_set.created_at,
                folder=folders_by_id.get(flashcard_set.folder) if flashcard_set.folder else None,
                card_count=await card_repo.count_for_set(flashcard_set.id),
            ))
    except PyMongoError as e:
        logger.error(f"Error loading dashboard for user {user.id}: {e}")
        return redirect("/")

    return templates.TemplateResponse(request, "dashboard.html", {
        "user": user,
        "sets": set_items,
        "folders": folders,
    })


@router.get("/health", summary="Liveness check")
async def health():
    return {
        "success": True,
        "message": "StudyDeck is running!",
        "version": APP_VERSION,
    }
