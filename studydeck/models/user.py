from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProviderProfile(BaseModel):
    """Identity returned by the OAuth provider after a successful exchange."""
    provider_id: str
    email: str
    display_name: str


class User(BaseModel):
    id: str
    google_id: str
    email: str
    name: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_mongo(cls, doc: dict) -> "User":
        return cls(
            id=str(doc["_id"]),
            google_id=doc["google_id"],
            email=doc.get("email", ""),
            name=doc.get("name", ""),
            created_at=doc.get("created_at"),
        )
