from pydantic import BaseModel


class Folder(BaseModel):
    id: str
    name: str
    user: str

    @classmethod
    def from_mongo(cls, doc: dict) -> "Folder":
        return cls(id=str(doc["_id"]), name=doc["name"], user=str(doc["user"]))
