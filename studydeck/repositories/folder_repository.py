from datetime import datetime
from typing import List, Optional

from pymongo import ASCENDING

from studydeck.core.database import FOLDERS
from studydeck.models.folder import Folder
from studydeck.repositories.base_repository import BaseRepository, to_object_id


class FolderRepository(BaseRepository):
    collection_name = FOLDERS
    model = Folder

    async def create_for_user(self, name: str, user_id: str) -> Folder:
        return await self.create({
            "name": name,
            "user": to_object_id(user_id),
            "created_at": datetime.utcnow(),
        })

    async def list_for_user(self, user_id: str) -> List[Folder]:
        """Folders of one user, alphabetical."""
        return await self.find(
            {"user": to_object_id(user_id)},
            sort=[("name", ASCENDING), ("_id", ASCENDING)],
        )

    async def find_owned(self, folder_id: str, user_id: str) -> Optional[Folder]:
        oid = to_object_id(folder_id)
        if oid is None:
            return None
        return await self.find_one({"_id": oid, "user": to_object_id(user_id)})
