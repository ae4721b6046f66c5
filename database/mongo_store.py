"""
MongoDB document store (pymongo async client)
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import AsyncMongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from database.base import INDEXES, DocumentStore, SortSpec
from services.errors import ConflictError, StoreError

logger = logging.getLogger(__name__)


class MongoDocumentStore(DocumentStore):
    """
    Thin wrapper over an ``AsyncMongoClient`` database.

    Driver errors are translated into ``StoreError`` (or ``ConflictError`` for
    unique index violations) so the services never see pymongo types.
    """

    def __init__(self, uri: str, database: str, client: Optional[AsyncMongoClient] = None):
        self.uri = uri
        self.database_name = database
        self._client = client
        self._db = None

    async def connect(self) -> None:
        if self._client is None:
            self._client = AsyncMongoClient(self.uri, tz_aware=True)
        self._db = self._client[self.database_name]
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            raise StoreError(f"MongoDB connection error: {e}") from e
        logger.info("MongoDB connected (database=%s)", self.database_name)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")

    @property
    def db(self):
        if self._db is None:
            raise StoreError("Database not connected")
        return self._db

    async def ensure_indexes(self) -> None:
        try:
            for collection, indexes in INDEXES.items():
                for keys, unique in indexes:
                    await self.db[collection].create_index(list(keys), unique=unique)
        except PyMongoError as e:
            raise StoreError(f"Index creation failed: {e}") from e

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        try:
            result = await self.db[collection].insert_one(dict(document))
        except DuplicateKeyError as e:
            raise ConflictError(f"Duplicate key in {collection}") from e
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return str(result.inserted_id)

    async def insert_many(self, collection: str, documents: List[Dict[str, Any]]) -> List[str]:
        if not documents:
            return []
        try:
            result = await self.db[collection].insert_many([dict(d) for d in documents])
        except DuplicateKeyError as e:
            raise ConflictError(f"Duplicate key in {collection}") from e
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return [str(i) for i in result.inserted_ids]

    async def find_one(self, collection: str, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self.db[collection].find_one(filter)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def find(self,
                   collection: str,
                   filter: Optional[Dict[str, Any]] = None,
                   sort: Optional[SortSpec] = None,
                   limit: Optional[int] = None) -> List[Dict[str, Any]]:
        try:
            cursor = self.db[collection].find(filter or {})
            if sort:
                cursor = cursor.sort(list(sort))
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(None)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def count(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        try:
            return await self.db[collection].count_documents(filter or {})
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def distinct(self, collection: str, field: str) -> List[Any]:
        try:
            return await self.db[collection].distinct(field)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    async def update_one(self,
                         collection: str,
                         doc_id: str,
                         inc: Optional[Dict[str, float]] = None,
                         max_: Optional[Dict[str, Any]] = None) -> bool:
        update: Dict[str, Dict[str, Any]] = {}
        if inc:
            update["$inc"] = dict(inc)
        if max_:
            update["$max"] = dict(max_)
        if not update:
            return await self.count(collection, {"_id": doc_id}) > 0
        try:
            result = await self.db[collection].update_one({"_id": doc_id}, update)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return result.matched_count > 0

    async def delete_many(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        try:
            result = await self.db[collection].delete_many(filter or {})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return result.deleted_count
