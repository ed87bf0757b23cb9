from datetime import datetime
from typing import List, Optional

from pymongo import ASCENDING

from studydeck.core.database import FLASHCARDS
from studydeck.models.flashcard import Flashcard
from studydeck.repositories.base_repository import BaseRepository, to_object_id


class FlashcardRepository(BaseRepository):
    collection_name = FLASHCARDS
    model = Flashcard

    async def create_in_set(self, set_id: str, question: str, answer: str) -> Flashcard:
        return await self.create({
            "question": question,
            "answer": answer,
            "flashcard_set": to_object_id(set_id),
            "created_at": datetime.utcnow(),
        })

    async def list_for_set(self, set_id: str) -> List[Flashcard]:
        # Oldest first: this is the study order
        return await self.find(
            {"flashcard_set": to_object_id(set_id)},
            sort=[("created_at", ASCENDING), ("_id", ASCENDING)],
        )

    async def count_for_set(self, set_id: str) -> int:
        return await self.count({"flashcard_set": to_object_id(set_id)})

    async def find_in_set(self, card_id: str, set_id: str) -> Optional[Flashcard]:
        oid = to_object_id(card_id)
        if oid is None:
            return None
        return await self.find_one({"_id": oid, "flashcard_set": to_object_id(set_id)})

    async def delete_for_set(self, set_id: str) -> int:
        return await self.delete_many({"flashcard_set": to_object_id(set_id)})
