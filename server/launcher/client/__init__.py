# server/launcher/client/__init__.py

from launcher.client.api import LauncherAPI, LauncherAPIError
from launcher.client.view import (
    LauncherView,
    LauncherState,
    Notification,
    derive_state,
    compute_reorder,
)

__all__ = [
    "LauncherAPI",
    "LauncherAPIError",
    "LauncherView",
    "LauncherState",
    "Notification",
    "derive_state",
    "compute_reorder",
]
