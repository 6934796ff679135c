# server/tests/test_validators.py

import pytest

from launcher.utils.validators import AppValidator, InputValidator, URLValidator


@pytest.mark.parametrize("url", [
    "https://github.com",
    "http://localhost:8080/dashboard",
    "https://192.168.1.10:8443",
    "  https://example.com/path?q=1  ",
])
def test_url_validator_accepts_absolute_http_urls(url):
    is_valid, normalized, error = URLValidator.validate(url)

    assert is_valid, error
    assert normalized == url.strip()


@pytest.mark.parametrize("url", [
    "not-a-url",
    "",
    None,
    42,
    "github.com",
    "https://",
    "javascript:alert(1)",
    "ftp://files.example.com",
    "https://exa mple.com",
    "https://example.com:port",
    "https://" + "a" * 2050 + ".com",
])
def test_url_validator_rejects_bad_urls(url):
    is_valid, normalized, error = URLValidator.validate(url)

    assert not is_valid
    assert normalized is None
    assert error


def test_name_is_stripped_and_control_chars_removed():
    assert InputValidator.validate_name("  Git\x00Hub ") == (True, "GitHub", None)
    assert InputValidator.validate_name("")[0] is False
    assert InputValidator.validate_name(None)[0] is False


def test_category_blank_becomes_none():
    assert InputValidator.validate_category(None) == (True, None, None)
    assert InputValidator.validate_category("") == (True, None, None)
    assert InputValidator.validate_category(" Dev ") == (True, "Dev", None)
    assert InputValidator.validate_category(["Dev"])[0] is False


def test_overlong_name_and_category_are_rejected():
    assert InputValidator.validate_name("a" * 255) == (True, "a" * 255, None)
    assert InputValidator.validate_name("a" * 256) == (False, None, "Name is too long (max 255 characters)")

    assert InputValidator.validate_category("c" * 100) == (True, "c" * 100, None)
    assert InputValidator.validate_category("c" * 101) == (
        False, None, "Category is too long (max 100 characters)"
    )


def test_validate_create_collects_all_errors():
    validated, errors = AppValidator.validate_create({"name": "", "url": "nope", "category": 1})

    assert validated is None
    assert [error["field"] for error in errors] == ["name", "url", "category"]


def test_validate_create_ignores_unknown_keys():
    validated, errors = AppValidator.validate_create(
        {"name": "GitHub", "url": "https://github.com", "position": 9, "id": "forced"}
    )

    assert errors == []
    assert validated == {"name": "GitHub", "url": "https://github.com", "category": None}


def test_validate_create_requires_object():
    validated, errors = AppValidator.validate_create(["GitHub"])

    assert validated is None
    assert errors


def test_validate_positions():
    updates, errors = AppValidator.validate_positions([{"id": "a", "position": 0, "extra": True}])

    assert errors == []
    assert updates == [{"id": "a", "position": 0}]

    updates, errors = AppValidator.validate_positions([{"id": "a", "position": 0}, {"id": "b", "position": "1"}])

    assert updates is None
    assert errors == [{"index": 1, "field": "position", "message": "position must be an integer"}]
