# server/launcher/routes/__init__.py

from launcher.routes.apps import apps_bp
from launcher.routes.pages import pages_bp

__all__ = [
    "apps_bp",
    "pages_bp",
]
