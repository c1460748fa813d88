"""
Tests for app/db - the generic document store backends.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from app.core.results import NOT_AVAILABLE
from app.db.memory import MemoryStore
from app.db.store import MongoStore
from app.models.query import OrderBy, QueryOptions, WhereClause


class TestMemoryStore:
    """Test the in-memory backend."""

    @pytest.mark.asyncio
    async def test_add_assigns_id_and_ignores_payload_id(self):
        """The store owns ids; an id in the payload is dropped."""
        store = MemoryStore()
        result = await store.add_document("things", {"id": "mine", "name": "A"})

        assert result.success
        assert result.data["id"] != "mine"
        assert result.data["name"] == "A"
        assert "id" not in store._collections["things"][result.data["id"]]

    @pytest.mark.asyncio
    async def test_get_missing_document(self):
        result = await MemoryStore().get_document("things", "nope")
        assert not result.success
        assert result.error == "Document not found"

    @pytest.mark.asyncio
    async def test_update_merges_fields(self):
        """Untouched fields are preserved."""
        store = MemoryStore()
        created = await store.add_document("things", {"name": "A", "size": 1})
        updated = await store.update_document("things", created.data["id"], {"size": 2})

        assert updated.data == {"id": created.data["id"], "name": "A", "size": 2}

    @pytest.mark.asyncio
    async def test_update_missing_document(self):
        result = await MemoryStore().update_document("things", "nope", {"size": 2})
        assert not result.success
        assert result.error == "Document not found after update"

    @pytest.mark.asyncio
    async def test_delete_is_unconditional(self):
        """Deleting twice still succeeds; the id is gone."""
        store = MemoryStore()
        created = await store.add_document("things", {"name": "A"})
        first = await store.delete_document("things", created.data["id"])
        second = await store.delete_document("things", created.data["id"])

        assert first.data is True and second.data is True
        assert not (await store.get_document("things", created.data["id"])).success

    @pytest.mark.asyncio
    async def test_reads_are_copies(self):
        """Mutating a returned entity does not change the stored one."""
        store = MemoryStore()
        created = await store.add_document("things", {"tags": ["a"]})
        created.data["tags"].append("b")

        fetched = await store.get_document("things", created.data["id"])
        assert fetched.data["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_collection_where_order_limit(self):
        store = MemoryStore()
        for n in (3, 1, 2, 5):
            await store.add_document("nums", {"n": n, "odd": n % 2 == 1})

        result = await store.get_collection("nums", QueryOptions(
            where=[WhereClause(field="odd", operator="==", value=True)],
            order_by=[OrderBy(field="n", direction="desc")],
            limit=2,
        ))

        assert [r["n"] for r in result.data] == [5, 3]
        assert result.pagination.total == 2
        assert result.pagination.page == 1

    @pytest.mark.asyncio
    async def test_set_document_uses_caller_id(self):
        store = MemoryStore()
        result = await store.set_document("users", "uid-1", {"email": "a@b.c"})
        assert result.data["id"] == "uid-1"

    @pytest.mark.asyncio
    async def test_query_documents(self):
        store = MemoryStore()
        await store.add_document("users", {"email": "a@b.c"})
        await store.add_document("users", {"email": "z@b.c"})

        result = await store.query_documents("users", "email", "==", "z@b.c")
        assert [r["email"] for r in result.data] == ["z@b.c"]


def mongo_collection():
    collection = MagicMock()
    database = MagicMock()
    database.__getitem__.return_value = collection
    return database, collection


class TestMongoStore:
    """Test the Motor-backed store with a mocked database."""

    @pytest.mark.asyncio
    async def test_unavailable_short_circuits(self):
        """Without a database every operation fails without I/O."""
        store = MongoStore(None)

        for call in (
            store.get_collection("x"),
            store.get_document("x", "1"),
            store.add_document("x", {}),
            store.update_document("x", "1", {}),
            store.delete_document("x", "1"),
            store.query_documents("x", "a", "==", 1),
        ):
            result = await call
            assert not result.success
            assert result.error == NOT_AVAILABLE

    def test_build_filter(self):
        oid = ObjectId()
        query = MongoStore.build_filter([
            WhereClause(field="id", operator="==", value=str(oid)),
            WhereClause(field="n", operator=">=", value=1),
            WhereClause(field="n", operator="<", value=5),
            WhereClause(field="tags", operator="array-contains", value="hr"),
        ])

        assert query == {
            "_id": {"$eq": oid},
            "n": {"$gte": 1, "$lt": 5},
            "tags": {"$elemMatch": {"$eq": "hr"}},
        }

    @pytest.mark.asyncio
    async def test_add_rereads_inserted_document(self):
        database, collection = mongo_collection()
        oid = ObjectId()
        collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=oid))
        collection.find_one = AsyncMock(return_value={"_id": oid, "name": "A"})

        result = await MongoStore(database).add_document("things", {"id": "ignored", "name": "A"})

        collection.insert_one.assert_awaited_once_with({"name": "A"})
        assert result.data == {"id": str(oid), "name": "A"}

    @pytest.mark.asyncio
    async def test_add_fails_when_reread_misses(self):
        database, collection = mongo_collection()
        collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
        collection.find_one = AsyncMock(return_value=None)

        result = await MongoStore(database).add_document("things", {"name": "A"})

        assert not result.success
        assert result.error == "Failed to create document"

    @pytest.mark.asyncio
    async def test_update_sets_fields(self):
        database, collection = mongo_collection()
        oid = ObjectId()
        collection.update_one = AsyncMock()
        collection.find_one = AsyncMock(return_value={"_id": oid, "size": 2})

        result = await MongoStore(database).update_document("things", str(oid), {"size": 2})

        collection.update_one.assert_awaited_once_with({"_id": oid}, {"$set": {"size": 2}})
        assert result.data["size"] == 2

    @pytest.mark.asyncio
    async def test_driver_errors_become_failures(self):
        """Exceptions are logged and converted, never raised."""
        database, collection = mongo_collection()
        collection.find_one = AsyncMock(side_effect=RuntimeError("connection reset"))

        result = await MongoStore(database).get_document("things", "abc")

        assert not result.success
        assert result.error == "connection reset"

    @pytest.mark.asyncio
    async def test_find_applies_sort_and_limit(self):
        database, collection = mongo_collection()
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[{"_id": "k1", "n": 1}])
        collection.find.return_value = cursor

        result = await MongoStore(database).get_collection("nums", QueryOptions(
            order_by=[OrderBy(field="n", direction="desc")], limit=5
        ))

        cursor.sort.assert_called_once_with([("n", -1)])
        cursor.limit.assert_called_once_with(5)
        assert result.data == [{"id": "k1", "n": 1}]
