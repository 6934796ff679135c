# server/launcher/utils/__init__.py

from launcher.utils.validators import URLValidator, InputValidator, AppValidator
from launcher.utils.responses import ApiResponse
from launcher.utils.helpers import (
    extract_hostname,
    get_domain_name,
    get_favicon_url,
    get_app_initials,
    slugify_label,
)

__all__ = [
    "URLValidator",
    "InputValidator",
    "AppValidator",
    "ApiResponse",
    "extract_hostname",
    "get_domain_name",
    "get_favicon_url",
    "get_app_initials",
    "slugify_label",
]
