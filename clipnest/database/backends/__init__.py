from .memory_odm_backend import MemoryODMBackend, MemoryStore
from .mongo_odm_backend import MongoODMBackend
from .odm_backend import ClipnestODMBackend

__all__ = ["ClipnestODMBackend", "MemoryODMBackend", "MemoryStore", "MongoODMBackend"]
