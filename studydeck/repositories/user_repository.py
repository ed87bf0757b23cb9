import logging
from datetime import datetime
from typing import Optional

from pymongo.errors import DuplicateKeyError

from studydeck.core.database import USERS
from studydeck.models.user import ProviderProfile, User
from studydeck.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    collection_name = USERS
    model = User

    async def find_by_google_id(self, google_id: str) -> Optional[User]:
        return await self.find_one({"google_id": google_id})

    async def find_or_create(self, profile: ProviderProfile) -> User:
        """Resolve a provider profile to the local user, creating it on first login.

        The upsert is atomic and ``google_id`` carries a unique index, so two
        concurrent first logins end up with the same document.
        """
        existing = await self.find_by_google_id(profile.provider_id)
        if existing:
            return existing

        try:
            result = await self.collection.update_one(
                {"google_id": profile.provider_id},
                {"$setOnInsert": {
                    "email": profile.email,
                    "name": profile.display_name,
                    "created_at": datetime.utcnow(),
                }},
                upsert=True,
            )
            if result.upserted_id is not None:
                logger.info(f"👤 Created user {result.upserted_id} for google_id={profile.provider_id}")
        except DuplicateKeyError:
            # Lost the race against another login for the same provider id
            logger.info(f"Concurrent login already created google_id={profile.provider_id}")

        return await self.find_by_google_id(profile.provider_id)
