"""
Document store interface

Services only talk to this interface. Filters use a small Mongo-compatible
subset: equality on (dotted) fields and ``{"$in": [...]}``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId

QUESTIONS = "questions"
USERS = "users"
TEST_RESULTS = "test_results"

ASCENDING = 1
DESCENDING = -1

SortSpec = Sequence[Tuple[str, int]]

# collection -> list of (keys, unique)
INDEXES: Dict[str, List[Tuple[SortSpec, bool]]] = {
    USERS: [([("email", ASCENDING)], True)],
    QUESTIONS: [([("topic", ASCENDING)], False)],
    TEST_RESULTS: [([("userId", ASCENDING), ("createdAt", DESCENDING)], False)],
}


def new_id() -> str:
    return str(ObjectId())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStore(ABC):
    """
    Async document store.

    Every method is a single all-or-nothing operation. No multi-operation
    transactions are offered.
    """

    async def connect(self) -> None:
        """Open connections (no-op by default)"""

    async def close(self) -> None:
        """Release connections (no-op by default)"""

    @abstractmethod
    async def ensure_indexes(self) -> None:
        ...

    @abstractmethod
    async def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document and return its ``_id``. Raises ConflictError on unique violations."""

    @abstractmethod
    async def insert_many(self, collection: str, documents: List[Dict[str, Any]]) -> List[str]:
        ...

    @abstractmethod
    async def find_one(self, collection: str, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def find(self,
                   collection: str,
                   filter: Optional[Dict[str, Any]] = None,
                   sort: Optional[SortSpec] = None,
                   limit: Optional[int] = None) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def count(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        ...

    @abstractmethod
    async def distinct(self, collection: str, field: str) -> List[Any]:
        ...

    @abstractmethod
    async def update_one(self,
                         collection: str,
                         doc_id: str,
                         inc: Optional[Dict[str, float]] = None,
                         max_: Optional[Dict[str, Any]] = None) -> bool:
        """
        Apply ``$inc`` and ``$max`` to one document atomically.

        Returns:
            True if a document with ``doc_id`` existed
        """

    @abstractmethod
    async def delete_many(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        ...
