from clipnest.database.backends.memory_odm_backend import MemoryODMBackend, MemoryStore
from clipnest.database.backends.mongo_odm_backend import MongoODMBackend
from clipnest.database.backends.odm_backend import ClipnestODMBackend
from clipnest.database.document import ClipnestDocument, IndexSpec, utcnow
from clipnest.database.exceptions import DocumentNotFoundError, DuplicateInsertError, StorageUnavailableError

__all__ = [
    "ClipnestDocument",
    "ClipnestODMBackend",
    "DocumentNotFoundError",
    "DuplicateInsertError",
    "IndexSpec",
    "MemoryODMBackend",
    "MemoryStore",
    "MongoODMBackend",
    "StorageUnavailableError",
    "utcnow",
]
