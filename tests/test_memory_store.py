import pytest

from database.base import DESCENDING, USERS
from services.errors import ConflictError


async def test_insert_assigns_string_id(store):
    doc_id = await store.insert_one("things", {"name": "a"})
    assert isinstance(doc_id, str) and len(doc_id) == 24
    assert (await store.find_one("things", {"_id": doc_id}))["name"] == "a"


async def test_returned_documents_are_copies(store):
    doc_id = await store.insert_one("things", {"tags": ["x"]})
    found = await store.find_one("things", {"_id": doc_id})
    found["tags"].append("y")
    assert (await store.find_one("things", {"_id": doc_id}))["tags"] == ["x"]


async def test_in_filter_and_sort(store):
    await store.insert_many("things", [
        {"_id": "1", "topic": "a", "n": 3},
        {"_id": "2", "topic": "b", "n": 1},
        {"_id": "3", "topic": "c", "n": 2},
    ])
    docs = await store.find("things", {"topic": {"$in": ["a", "b"]}}, sort=[("n", DESCENDING)])
    assert [d["_id"] for d in docs] == ["1", "2"]
    assert sorted(await store.distinct("things", "topic")) == ["a", "b", "c"]
    assert await store.count("things", {"topic": "c"}) == 1


async def test_unique_email(store):
    await store.insert_one(USERS, {"email": "a@example.com"})
    with pytest.raises(ConflictError):
        await store.insert_one(USERS, {"email": "a@example.com"})


async def test_update_one_inc_max(store):
    await store.insert_one(USERS, {"_id": "u1", "email": "u1@example.com", "stats": {"bestScore": 50}})

    assert await store.update_one(
        USERS, "u1",
        inc={"stats.testsTaken": 1},
        max_={"stats.bestScore": 40},
    )
    doc = await store.find_one(USERS, {"_id": "u1"})
    assert doc["stats"] == {"bestScore": 50, "testsTaken": 1}

    assert await store.update_one(USERS, "missing", inc={"stats.testsTaken": 1}) is False


async def test_update_one_accepts_only_inc_and_max(store):
    await store.insert_one(USERS, {"_id": "u1", "email": "u1@example.com"})
    with pytest.raises(TypeError):
        await store.update_one(USERS, "u1", set_={"stats.bestScore": 100})


async def test_delete_many(store):
    await store.insert_many("things", [{"k": 1}, {"k": 1}, {"k": 2}])
    assert await store.delete_many("things", {"k": 1}) == 2
    assert await store.count("things") == 1
