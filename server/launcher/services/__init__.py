# server/launcher/services/__init__.py

from launcher.services.storage import (
    AppStorage,
    MemoryStorage,
    DatabaseStorage,
    StorageError,
    create_storage,
)

__all__ = [
    "AppStorage",
    "MemoryStorage",
    "DatabaseStorage",
    "StorageError",
    "create_storage",
]
