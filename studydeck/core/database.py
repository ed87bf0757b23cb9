import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
import redis.asyncio as redis
import ssl
from pymongo import ASCENDING, DESCENDING

from studydeck.core.config import MONGODB_URL, MONGODB_DB_NAME, REDIS_URL

logger = logging.getLogger(__name__)

# MongoDB client and database
client = AsyncIOMotorClient(MONGODB_URL)
db = client[MONGODB_DB_NAME]

# Collection names
USERS = "users"
FOLDERS = "folders"
FLASHCARD_SETS = "flashcard_sets"
FLASHCARDS = "flashcards"

# Configure SSL for hosted Redis (rediss:// URLs)
_redis_options = {"decode_responses": True}
if REDIS_URL.startswith("rediss://"):
    _redis_options["ssl_cert_reqs"] = ssl.CERT_NONE
redis_client = redis.from_url(REDIS_URL, **_redis_options)


def get_db() -> AsyncIOMotorDatabase:
    return db


def get_redis():
    return redis_client


async def ensure_indexes(database) -> None:
    """Create the indexes the application relies on.

    The unique index on ``users.google_id`` is what makes concurrent first
    logins resolve to a single user document.
    """
    await database[USERS].create_index("google_id", unique=True)
    await database[FOLDERS].create_index([("user", ASCENDING), ("name", ASCENDING)])
    await database[FLASHCARD_SETS].create_index([("user", ASCENDING), ("created_at", DESCENDING)])
    await database[FLASHCARDS].create_index([("flashcard_set", ASCENDING), ("created_at", ASCENDING)])
    logger.info("MongoDB indexes ensured")
