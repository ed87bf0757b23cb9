from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from studydeck.models.folder import Folder


class Flashcard(BaseModel):
    id: str
    question: str
    answer: str
    flashcard_set: str
    created_at: datetime

    @classmethod
    def from_mongo(cls, doc: dict) -> "Flashcard":
        return cls(
            id=str(doc["_id"]),
            question=doc["question"],
            answer=doc["answer"],
            flashcard_set=str(doc["flashcard_set"]),
            created_at=doc["created_at"],
        )


class FlashcardSet(BaseModel):
    id: str
    title: str
    user: str
    folder: Optional[str] = None  # None means not filed in any folder
    created_at: datetime

    @classmethod
    def from_mongo(cls, doc: dict) -> "FlashcardSet":
        folder = doc.get("folder")
        return cls(
            id=str(doc["_id"]),
            title=doc["title"],
            user=str(doc["user"]),
            folder=str(folder) if folder is not None else None,
            created_at=doc["created_at"],
        )


class DashboardSetItem(BaseModel):
    """A set as listed on the dashboard, with its folder resolved."""
    id: str
    title: str
    created_at: datetime
    folder: Optional[Folder] = None
    card_count: int
