import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pymongo.errors import PyMongoError

from studydeck.api.deps import redirect, require_user
from studydeck.core.database import get_db
from studydeck.core.templates import templates
from studydeck.repositories.folder_repository import FolderRepository
from studydeck.services.cascade import delete_folder as delete_folder_and_unfile

router = APIRouter(prefix="/folders", tags=["folders"])
logger = logging.getLogger(__name__)


@router.get("/new", response_class=HTMLResponse, summary="Form to create a folder")
async def new_folder(request: Request, user=Depends(require_user)):
    return templates.TemplateResponse(request, "new_folder.html", {"user": user})


@router.post("/create", summary="Create a folder owned by the current user")
async def create_folder(name: str = Form(""), user=Depends(require_user), db=Depends(get_db)):
    name = name.strip()
    if not name:
        return redirect("/folders/new")

    try:
        folder = await FolderRepository(db).create_for_user(name, user.id)
    except PyMongoError as e:
        logger.error(f"Error creating folder for user {user.id}: {e}")
        return redirect("/folders/new")

    logger.info(f"📁 User {user.id} created folder {folder.id}")
    return redirect("/dashboard")


@router.post("/{folder_id}/delete", summary="Delete a folder; its sets are kept")
async def delete_folder(folder_id: str, user=Depends(require_user), db=Depends(get_db)):
    try:
        folder = await FolderRepository(db).find_owned(folder_id, user.id)
        if folder is None:
            logger.warning(f"User {user.id} denied delete of folder {folder_id}")
            return redirect("/dashboard")
        await delete_folder_and_unfile(db, folder.id, user.id)
    except PyMongoError as e:
        logger.error(f"Error deleting folder {folder_id}: {e}")
    return redirect("/dashboard")
