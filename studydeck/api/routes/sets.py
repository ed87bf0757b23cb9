import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pymongo.errors import PyMongoError

from studydeck.api.deps import redirect, require_user
from studydeck.core.database import get_db
from studydeck.core.templates import templates
from studydeck.repositories.flashcard_repository import FlashcardRepository
from studydeck.repositories.flashcard_set_repository import FlashcardSetRepository
from studydeck.repositories.folder_repository import FolderRepository
from studydeck.services.cascade import delete_flashcard_set

router = APIRouter(prefix="/sets", tags=["sets"])
logger = logging.getLogger(__name__)


async def _resolve_folder_choice(db, folder_id: str, user_id: str) -> Optional[str]:
    """Validate a folder picked in a form.

    Returns "" for "no folder", the folder id when it belongs to the user,
    and None when the choice is not acceptable.
    """
    folder_id = (folder_id or "").strip()
    if not folder_id:
        return ""
    folder = await FolderRepository(db).find_owned(folder_id, user_id)
    if folder is None:
        return None
    return folder.id


@router.get("/new", response_class=HTMLResponse, summary="Form to create a set")
async def new_set(request: Request, user=Depends(require_user), db=Depends(get_db)):
    try:
        folders = await FolderRepository(db).list_for_user(user.id)
    except PyMongoError as e:
        logger.error(f"Error loading folders for user {user.id}: {e}")
        return redirect("/dashboard")
    return templates.TemplateResponse(request, "new_set.html", {"user": user, "folders": folders})


@router.post("/create", summary="Create a set owned by the current user")
async def create_set(
    title: str = Form(""),
    folder: str = Form(""),
    user=Depends(require_user),
    db=Depends(get_db),
):
    title = title.strip()
    if not title:
        return redirect("/sets/new")

    try:
        folder_id = await _resolve_folder_choice(db, folder, user.id)
        if folder_id is None:
            logger.warning(f"User {user.id} tried to file a new set into folder {folder!r} they do not own")
            return redirect("/sets/new")
        flashcard_set = await FlashcardSetRepository(db).create_for_user(title, user.id, folder_id or None)
    except PyMongoError as e:
        logger.error(f"Error creating set for user {user.id}: {e}")
        return redirect("/sets/new")

    logger.info(f"📚 User {user.id} created set {flashcard_set.id}")
    return redirect("/dashboard")


@router.get("/{set_id}", response_class=HTMLResponse, summary="Show a set with its cards")
async def show_set(set_id: str, request: Request, user=Depends(require_user), db=Depends(get_db)):
    try:
        flashcard_set = await FlashcardSetRepository(db).find_owned(set_id, user.id)
        if flashcard_set is None:
            logger.warning(f"User {user.id} denied access to set {set_id}")
            return redirect("/dashboard")
        cards = await FlashcardRepository(db).list_for_set(flashcard_set.id)
        folders = await FolderRepository(db).list_for_user(user.id)
    except PyMongoError as e:
        logger.error(f"Error loading set {set_id}: {e}")
        return redirect("/dashboard")

    return templates.TemplateResponse(request, "set.html", {
        "user": user,
        "flashcard_set": flashcard_set,
        "cards": cards,
        "folders": folders,
    })


@router.post("/{set_id}/delete", summary="Delete a set and all of its cards")
async def delete_set(set_id: str, user=Depends(require_user), db=Depends(get_db)):
    try:
        flashcard_set = await FlashcardSetRepository(db).find_owned(set_id, user.id)
        if flashcard_set is None:
            logger.warning(f"User {user.id} denied delete of set {set_id}")
            return redirect("/dashboard")
        await delete_flashcard_set(db, flashcard_set.id)
    except PyMongoError as e:
        logger.error(f"Error deleting set {set_id}: {e}")
    return redirect("/dashboard")


@router.post("/{set_id}/cards/add", summary="Add a card to a set")
async def add_card(
    set_id: str,
    question: str = Form(""),
    answer: str = Form(""),
    user=Depends(require_user),
    db=Depends(get_db),
):
    try:
        flashcard_set = await FlashcardSetRepository(db).find_owned(set_id, user.id)
        if flashcard_set is None:
            logger.warning(f"User {user.id} denied adding a card to set {set_id}")
            return redirect("/dashboard")

        question, answer = question.strip(), answer.strip()
        if question and answer:
            await FlashcardRepository(db).create_in_set(flashcard_set.id, question, answer)
    except PyMongoError as e:
        logger.error(f"Error adding card to set {set_id}: {e}")
        return redirect("/dashboard")

    return redirect(f"/sets/{flashcard_set.id}")


@router.post("/{set_id}/cards/{card_id}/delete", summary="Delete one card")
async def delete_card(set_id: str, card_id: str, user=Depends(require_user), db=Depends(get_db)):
    try:
        flashcard_set = await FlashcardSetRepository(db).find_owned(set_id, user.id)
        if flashcard_set is None:
            logger.warning(f"User {user.id} denied deleting card {card_id} of set {set_id}")
            return redirect("/dashboard")

        card_repo = FlashcardRepository(db)
        card = await card_repo.find_in_set(card_id, flashcard_set.id)
        if card is not None:
            await card_repo.delete(card.id)
    except PyMongoError as e:
        logger.error(f"Error deleting card {card_id}: {e}")
        return redirect("/dashboard")

    return redirect(f"/sets/{flashcard_set.id}")


@router.post("/{set_id}/update-folder", summary="Move a set into another folder or out of all folders")
async def update_folder(
    set_id: str,
    folder: str = Form(""),
    user=Depends(require_user),
    db=Depends(get_db),
):
    try:
        set_repo = FlashcardSetRepository(db)
        flashcard_set = await set_repo.find_owned(set_id, user.id)
        if flashcard_set is None:
            logger.warning(f"User {user.id} denied refiling set {set_id}")
            return redirect("/dashboard")

        folder_id = await _resolve_folder_choice(db, folder, user.id)
        if folder_id is None:
            logger.warning(f"User {user.id} tried to file set {set_id} into folder {folder!r} they do not own")
        else:
            await set_repo.set_folder(flashcard_set.id, folder_id or None)
    except PyMongoError as e:
        logger.error(f"Error updating folder of set {set_id}: {e}")
        return redirect("/dashboard")

    return redirect(f"/sets/{flashcard_set.id}")


@router.get("/{set_id}/study", response_class=HTMLResponse, summary="Study a set card by card")
async def study_set(set_id: str, request: Request, user=Depends(require_user), db=Depends(get_db)):
    try:
        flashcard_set = await FlashcardSetRepository(db).find_owned(set_id, user.id)
        if flashcard_set is None:
            logger.warning(f"User {user.id} denied studying set {set_id}")
            return redirect("/dashboard")
        cards = await FlashcardRepository(db).list_for_set(flashcard_set.id)
    except PyMongoError as e:
        logger.error(f"Error loading set {set_id} for study: {e}")
        return redirect("/dashboard")

    return templates.TemplateResponse(request, "study.html", {
        "user": user,
        "flashcard_set": flashcard_set,
        "cards": cards,
    })
