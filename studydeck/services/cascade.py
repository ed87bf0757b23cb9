import logging

from studydeck.core.database import FLASHCARDS, FLASHCARD_SETS, FOLDERS
from studydeck.repositories.base_repository import to_object_id
from studydeck.repositories.flashcard_repository import FlashcardRepository
from studydeck.repositories.flashcard_set_repository import FlashcardSetRepository

logger = logging.getLogger(__name__)


async def delete_flashcard_set(db, set_id: str) -> int:
    """Delete a set and then its cards; returns the number of cards removed.

    The two deletes are not atomic. If the process dies in between, the
    remaining cards have no parent and are removed by
    ``sweep_orphaned_flashcards`` on the next startup.
    """
    deleted = await FlashcardSetRepository(db).delete(set_id)
    if not deleted:
        return 0
    removed = await FlashcardRepository(db).delete_for_set(set_id)
    logger.info(f"🗑️ Deleted set {set_id} and {removed} flashcard(s)")
    return removed


async def sweep_orphaned_flashcards(db) -> int:
    """Delete every flashcard whose parent set no longer exists."""
    parent_ids = await db[FLASHCARDS].distinct("flashcard_set")
    if not parent_ids:
        return 0

    existing = set(await db[FLASHCARD_SETS].distinct("_id", {"_id": {"$in": parent_ids}}))
    missing = [pid for pid in parent_ids if pid not in existing]
    if not missing:
        return 0

    result = await db[FLASHCARDS].delete_many({"flashcard_set": {"$in": missing}})
    logger.warning(f"🧹 Swept {result.deleted_count} orphaned flashcard(s) from {len(missing)} missing set(s)")
    return result.deleted_count


async def delete_folder(db, folder_id: str, user_id: str) -> int:
    """Un-file the owner's sets from a folder, then delete the folder.

    Sets are moved out first, so an interrupted delete leaves an empty
    folder rather than sets pointing at a missing one.
    """
    folder_filter = {"_id": to_object_id(folder_id), "user": to_object_id(user_id)}
    if await db[FOLDERS].find_one(folder_filter) is None:
        return 0
    unfiled = await FlashcardSetRepository(db).unfile_from_folder(folder_id, user_id)
    await db[FOLDERS].delete_one(folder_filter)
    logger.info(f"🗑️ Deleted folder {folder_id}, {unfiled} set(s) moved out of it")
    return unfiled
