# server/launcher/models/__init__.py

from launcher.models.app_entry import AppEntry

__all__ = [
    "AppEntry",
]
