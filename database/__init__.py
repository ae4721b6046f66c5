"""
Database module - document store backends
"""

from .base import DocumentStore, QUESTIONS, USERS, TEST_RESULTS
from .memory_store import MemoryDocumentStore
from .mongo_store import MongoDocumentStore


def create_store(backend: str, mongodb_uri: str = "", mongodb_database: str = "") -> DocumentStore:
    """Build the store selected in settings ("mongo" or "memory")"""
    if backend == "memory":
        return MemoryDocumentStore()
    if backend == "mongo":
        return MongoDocumentStore(mongodb_uri, mongodb_database)
    raise ValueError(f"Unknown store backend: {backend}")


__all__ = [
    'DocumentStore',
    'MemoryDocumentStore',
    'MongoDocumentStore',
    'create_store',
    'QUESTIONS',
    'USERS',
    'TEST_RESULTS',
]
