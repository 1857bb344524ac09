from hackboard.services.file_backend import FileBackend
from hackboard.services.redis_backend import RedisBackend
from hackboard.services.storage import build_backends
from hackboard.services.storage_backend import StorageBackend

__all__ = [
    "FileBackend",
    "RedisBackend",
    "StorageBackend",
    "build_backends",
]
