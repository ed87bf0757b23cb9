from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id coming from a URL or form; malformed ids yield None."""
    if isinstance(value, ObjectId):
        return value
    if not value or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


class BaseRepository:
    """CRUD over one MongoDB collection, returning pydantic models."""

    collection_name: str = ""
    model = None

    def __init__(self, db):
        self.collection = db[self.collection_name]

    def _to_model(self, doc: Optional[dict]):
        if doc is None:
            return None
        return self.model.from_mongo(doc)

    async def create(self, fields: Dict[str, Any]):
        doc = dict(fields)
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self._to_model(doc)

    async def find_by_id(self, id: Any):
        oid = to_object_id(id)
        if oid is None:
            return None
        return self._to_model(await self.collection.find_one({"_id": oid}))

    async def find_one(self, filter: Dict[str, Any]):
        return self._to_model(await self.collection.find_one(filter))

    async def find(self, filter: Dict[str, Any], sort: Optional[Sequence[Tuple[str, int]]] = None) -> List:
        cursor = self.collection.find(filter)
        if sort:
            cursor = cursor.sort(list(sort))
        docs = await cursor.to_list(length=None)
        return [self._to_model(doc) for doc in docs]

    async def update(self, id: Any, fields: Dict[str, Any]) -> bool:
        oid = to_object_id(id)
        if oid is None:
            return False
        result = await self.collection.update_one({"_id": oid}, {"$set": fields})
        return result.matched_count > 0

    async def delete(self, id: Any) -> bool:
        oid = to_object_id(id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def delete_many(self, filter: Dict[str, Any]) -> int:
        result = await self.collection.delete_many(filter)
        return result.deleted_count

    async def count(self, filter: Dict[str, Any]) -> int:
        return await self.collection.count_documents(filter)
