from datetime import datetime
from typing import List, Optional

from pymongo import DESCENDING

from studydeck.core.database import FLASHCARD_SETS
from studydeck.models.flashcard import FlashcardSet
from studydeck.repositories.base_repository import BaseRepository, to_object_id


class FlashcardSetRepository(BaseRepository):
    collection_name = FLASHCARD_SETS
    model = FlashcardSet

    async def create_for_user(self, title: str, user_id: str, folder_id: Optional[str] = None) -> FlashcardSet:
        return await self.create({
            "title": title,
            "user": to_object_id(user_id),
            "folder": to_object_id(folder_id),
            "created_at": datetime.utcnow(),
        })

    async def list_for_user(self, user_id: str) -> List[FlashcardSet]:
        """Sets of one user, newest first."""
        return await self.find(
            {"user": to_object_id(user_id)},
            sort=[("created_at", DESCENDING), ("_id", DESCENDING)],
        )

    async def find_owned(self, set_id: str, user_id: str) -> Optional[FlashcardSet]:
        """Return the set only when it exists and belongs to ``user_id``."""
        oid = to_object_id(set_id)
        if oid is None:
            return None
        return await self.find_one({"_id": oid, "user": to_object_id(user_id)})

    async def set_folder(self, set_id: str, folder_id: Optional[str]) -> bool:
        return await self.update(set_id, {"folder": to_object_id(folder_id)})

    async def unfile_from_folder(self, folder_id: str, user_id: str) -> int:
        result = await self.collection.update_many(
            {"folder": to_object_id(folder_id), "user": to_object_id(user_id)},
            {"$set": {"folder": None}},
        )
        return result.modified_count
