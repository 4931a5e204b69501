"""Storage package - JSON documents kept in a local SQLite file.

``from storage import BlobStore, StorageError`` is the public API.
"""
from errors import StorageError
from storage.core import BlobStore

__all__ = ["BlobStore", "StorageError"]
