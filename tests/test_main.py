from pymongo.errors import ServerSelectionTimeoutError

from studydeck import main


async def test_startup_survives_unreachable_mongo(monkeypatch, caplog):
    async def unreachable(database):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    monkeypatch.setattr(main, "ensure_indexes", unreachable)

    async with main.lifespan(main.app):
        pass

    assert "MongoDB connection error" in caplog.text


async def test_startup_prepares_indexes_and_sweeps(monkeypatch):
    calls = []

    async def record_indexes(database):
        calls.append("indexes")

    async def record_sweep(database):
        calls.append("sweep")
        return 0

    monkeypatch.setattr(main, "ensure_indexes", record_indexes)
    monkeypatch.setattr(main, "sweep_orphaned_flashcards", record_sweep)

    async with main.lifespan(main.app):
        pass

    assert calls == ["indexes", "sweep"]
