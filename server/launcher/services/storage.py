# server/launcher/services/storage.py

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from launcher.extensions import db
from launcher.models.app_entry import AppEntry

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the backing store fails to complete an operation"""


class AppStorage(ABC):
    """
    Capability set every launcher store provides.

    Implementations are constructed by ``create_storage`` and handed to the
    application factory; routes reach the active store through
    ``current_app.storage``.
    """

    @abstractmethod
    def list(self) -> List[AppEntry]:
        ...

    @abstractmethod
    def create(self, data: dict) -> AppEntry:
        ...

    @abstractmethod
    def delete(self, app_id: str) -> bool:
        ...

    @abstractmethod
    def update_positions(self, updates: List[dict]) -> None:
        ...

    def ping(self) -> None:
        pass


class MemoryStorage(AppStorage):
    """Keeps entries in a dict keyed by id; insertion order is the natural order"""

    def __init__(self):
        self._apps: Dict[str, AppEntry] = {}

    def list(self) -> List[AppEntry]:
        return list(self._apps.values())

    def create(self, data: dict) -> AppEntry:
        app = AppEntry(
            name=data["name"],
            url=data["url"],
            category=data.get("category"),
        )
        self._apps[app.id] = app
        return app

    def delete(self, app_id: str) -> bool:
        return self._apps.pop(app_id, None) is not None

    def update_positions(self, updates: List[dict]) -> None:
        # Resolve the whole batch before touching anything
        resolved = []
        for item in updates:
            app = self._apps.get(item["id"])
            if app is None:
                logger.warning(f"Skipping position update for unknown app {item['id']}")
                continue
            resolved.append((app, item["position"]))

        for app, position in resolved:
            app.position = position


class DatabaseStorage(AppStorage):
    """Stores entries in the ``apps`` table through the Flask-SQLAlchemy session"""

    def list(self) -> List[AppEntry]:
        try:
            return AppEntry.query.all()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Failed to list apps: {e}") from e

    def create(self, data: dict) -> AppEntry:
        try:
            app = AppEntry(
                name=data["name"],
                url=data["url"],
                category=data.get("category"),
            )
            db.session.add(app)
            db.session.commit()
            return app
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Failed to create app: {e}") from e

    def delete(self, app_id: str) -> bool:
        try:
            app = db.session.get(AppEntry, app_id)
            if not app:
                return False

            db.session.delete(app)
            db.session.commit()
            return True
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Failed to delete app {app_id}: {e}") from e

    def update_positions(self, updates: List[dict]) -> None:
        """Apply every position update in a single transaction"""
        try:
            for item in updates:
                app = db.session.get(AppEntry, item["id"])
                if not app:
                    logger.warning(f"Skipping position update for unknown app {item['id']}")
                    continue
                app.position = item["position"]

            db.session.commit()
        except Exception as e:
            db.session.rollback()
            raise StorageError(f"Failed to update positions: {e}") from e

    def ping(self) -> None:
        try:
            db.session.execute(text("SELECT 1"))
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Database unreachable: {e}") from e


STORAGE_BACKENDS = {
    "memory": MemoryStorage,
    "database": DatabaseStorage,
}


def create_storage(backend: Optional[str] = None) -> AppStorage:
    backend = (backend or "database").lower()

    storage_class = STORAGE_BACKENDS.get(backend)
    if storage_class is None:
        raise ValueError(f"Unknown storage backend: {backend}")

    logger.info(f"Using {backend} storage")
    return storage_class()
