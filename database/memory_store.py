"""
In-process document store

Used for local development and tests. Each coroutine does all of its reading
and writing without awaiting in between, so every operation is atomic with
respect to other tasks on the same event loop.
"""

import asyncio
import copy
from collections import defaultdict
from typing import Any, Dict, List, Optional

from database.base import INDEXES, DocumentStore, SortSpec, new_id
from services.errors import ConflictError

_MISSING = object()


def _get_path(doc: Dict[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _set_path(doc: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    target = doc
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = value


def _matches(doc: Dict[str, Any], filter: Optional[Dict[str, Any]]) -> bool:
    for path, condition in (filter or {}).items():
        value = _get_path(doc, path)
        if isinstance(condition, dict) and "$in" in condition:
            candidates = condition["$in"]
            if isinstance(value, list):
                if not any(v in candidates for v in value):
                    return False
            elif value is _MISSING or value not in candidates:
                return False
        elif isinstance(value, list) and not isinstance(condition, list):
            if condition not in value:
                return False
        elif value is _MISSING or value != condition:
            return False
    return True


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store mirroring the subset of Mongo semantics the services use"""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self._unique_fields: Dict[str, List[str]] = defaultdict(list)

    async def ensure_indexes(self) -> None:
        for collection, indexes in INDEXES.items():
            for keys, unique in indexes:
                if unique and len(keys) == 1:
                    field = keys[0][0]
                    if field not in self._unique_fields[collection]:
                        self._unique_fields[collection].append(field)

    def _check_unique(self, collection: str, document: Dict[str, Any]) -> None:
        for field in self._unique_fields.get(collection, []):
            value = _get_path(document, field)
            if value is _MISSING:
                continue
            for existing in self._collections[collection].values():
                if _get_path(existing, field) == value:
                    raise ConflictError(f"Duplicate value for {collection}.{field}")

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        await asyncio.sleep(0)
        doc = copy.deepcopy(document)
        doc_id = str(doc.get("_id") or new_id())
        doc["_id"] = doc_id
        if doc_id in self._collections[collection]:
            raise ConflictError(f"Duplicate _id in {collection}")
        self._check_unique(collection, doc)
        self._collections[collection][doc_id] = doc
        return doc_id

    async def insert_many(self, collection: str, documents: List[Dict[str, Any]]) -> List[str]:
        return [await self.insert_one(collection, d) for d in documents]

    async def find_one(self, collection: str, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        await asyncio.sleep(0)
        for doc in self._collections[collection].values():
            if _matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    async def find(self,
                   collection: str,
                   filter: Optional[Dict[str, Any]] = None,
                   sort: Optional[SortSpec] = None,
                   limit: Optional[int] = None) -> List[Dict[str, Any]]:
        await asyncio.sleep(0)
        docs = [copy.deepcopy(d) for d in self._collections[collection].values() if _matches(d, filter)]
        # Stable sorts applied from the least significant key
        for key, direction in reversed(list(sort or [])):
            present = [d for d in docs if _get_path(d, key) is not _MISSING]
            missing = [d for d in docs if _get_path(d, key) is _MISSING]
            present.sort(key=lambda d: _get_path(d, key), reverse=direction < 0)
            docs = present + missing if direction < 0 else missing + present
        if limit:
            docs = docs[:limit]
        return docs

    async def count(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        await asyncio.sleep(0)
        return sum(1 for d in self._collections[collection].values() if _matches(d, filter))

    async def distinct(self, collection: str, field: str) -> List[Any]:
        await asyncio.sleep(0)
        values: List[Any] = []
        for doc in self._collections[collection].values():
            value = _get_path(doc, field)
            if value is not _MISSING and value not in values:
                values.append(value)
        return values

    async def update_one(self,
                         collection: str,
                         doc_id: str,
                         inc: Optional[Dict[str, float]] = None,
                         max_: Optional[Dict[str, Any]] = None) -> bool:
        await asyncio.sleep(0)
        doc = self._collections[collection].get(doc_id)
        if doc is None:
            return False
        # Compute every new value before touching the document
        changes = []
        for path, delta in (inc or {}).items():
            current = _get_path(doc, path)
            changes.append((path, (0 if current is _MISSING else current) + delta))
        for path, candidate in (max_ or {}).items():
            current = _get_path(doc, path)
            if current is _MISSING or candidate > current:
                changes.append((path, candidate))

        for path, value in changes:
            _set_path(doc, path, value)
        return True

    async def delete_many(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        await asyncio.sleep(0)
        doomed = [k for k, d in self._collections[collection].items() if _matches(d, filter)]
        for key in doomed:
            del self._collections[collection][key]
        return len(doomed)
