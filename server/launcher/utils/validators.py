# server/launcher/utils/validators.py

import re
from typing import Any, List, Optional, Tuple
from urllib.parse import urlparse


class URLValidator:
    ALLOWED_SCHEMES = {"http", "https"}
    BLOCKED_SCHEMES = {"javascript", "data", "vbscript", "file"}
    MAX_URL_LENGTH = 2048

    @classmethod
    def validate(cls, url: Any) -> Tuple[bool, Optional[str], Optional[str]]:
        if not isinstance(url, str) or not url.strip():
            return False, None, "URL is required"

        url = url.strip()

        if len(url) > cls.MAX_URL_LENGTH:
            return False, None, f"URL is too long (max {cls.MAX_URL_LENGTH} characters)"

        try:
            parsed = urlparse(url)
            # Accessing .port raises on malformed ports like "host:abc"
            parsed.port
        except ValueError:
            return False, None, "Please enter a valid URL"

        scheme = parsed.scheme.lower()

        if scheme in cls.BLOCKED_SCHEMES:
            return False, None, "This URL type is not allowed"

        if scheme not in cls.ALLOWED_SCHEMES:
            return False, None, "Please enter a valid URL"

        if not parsed.hostname:
            return False, None, "Please enter a valid URL"

        if any(ch.isspace() for ch in url):
            return False, None, "Please enter a valid URL"

        return True, url, None


class InputValidator:
    MAX_NAME_LENGTH = 255
    MAX_CATEGORY_LENGTH = 100

    @classmethod
    def validate_name(cls, name: Any) -> Tuple[bool, Optional[str], Optional[str]]:
        if not isinstance(name, str):
            return False, None, "Name is required"

        if len(name.strip()) > cls.MAX_NAME_LENGTH:
            return False, None, f"Name is too long (max {cls.MAX_NAME_LENGTH} characters)"

        name = cls.sanitize_string(name, max_length=cls.MAX_NAME_LENGTH)

        if not name:
            return False, None, "Name is required"

        return True, name, None

    @classmethod
    def validate_category(cls, category: Any) -> Tuple[bool, Optional[str], Optional[str]]:
        if category is None:
            return True, None, None

        if not isinstance(category, str):
            return False, None, "Category must be a string"

        if len(category.strip()) > cls.MAX_CATEGORY_LENGTH:
            return False, None, f"Category is too long (max {cls.MAX_CATEGORY_LENGTH} characters)"

        category = cls.sanitize_string(category, max_length=cls.MAX_CATEGORY_LENGTH)

        # Blank categories are stored as NULL so grouping sees a single "Uncategorized"
        return True, category or None, None

    @classmethod
    def sanitize_string(cls, value: str, max_length: int = 255) -> str:
        if not value:
            return ""

        value = value.strip()

        if len(value) > max_length:
            value = value[:max_length]

        value = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', value)

        return value


class AppValidator:
    MAX_POSITION = 2147483647

    @classmethod
    def validate_create(cls, data: Any) -> Tuple[Optional[dict], List[dict]]:
        """
        Validate a create payload.

        Returns the normalized ``{name, url, category}`` dict and an empty
        error list, or ``None`` and one ``{field, message}`` entry per
        violation. Unknown keys are ignored.
        """
        if not isinstance(data, dict):
            return None, [{"field": None, "message": "Expected a JSON object"}]

        errors = []

        is_valid, name, error = InputValidator.validate_name(data.get("name"))
        if not is_valid:
            errors.append({"field": "name", "message": error})

        is_valid, url, error = URLValidator.validate(data.get("url"))
        if not is_valid:
            errors.append({"field": "url", "message": error})

        is_valid, category, error = InputValidator.validate_category(data.get("category"))
        if not is_valid:
            errors.append({"field": "category", "message": error})

        if errors:
            return None, errors

        return {"name": name, "url": url, "category": category}, []

    @classmethod
    def validate_positions(cls, data: Any) -> Tuple[Optional[List[dict]], List[dict]]:
        if not isinstance(data, list):
            return None, [{"index": None, "message": "Expected an array of {id, position} objects"}]

        updates = []
        errors = []

        for index, item in enumerate(data):
            if not isinstance(item, dict):
                errors.append({"index": index, "message": "Expected an object"})
                continue

            app_id = item.get("id")
            position = item.get("position")

            if not isinstance(app_id, str):
                errors.append({"index": index, "field": "id", "message": "id must be a string"})

            # bool is an int subclass; JSON true/false are not positions
            if isinstance(position, bool) or not isinstance(position, int):
                errors.append({"index": index, "field": "position", "message": "position must be an integer"})
            elif not 0 <= position <= cls.MAX_POSITION:
                errors.append({"index": index, "field": "position", "message": "position is out of range"})

            updates.append({"id": app_id, "position": position})

        if errors:
            return None, errors

        return updates, []
