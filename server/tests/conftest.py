# server/tests/conftest.py

import pytest

from launcher import create_app
from launcher.config import TestingConfig
from launcher.extensions import db
from launcher.services.storage import MemoryStorage, DatabaseStorage

ACCESS_CODE = TestingConfig.ACCESS_CODE


class UngatedConfig(TestingConfig):
    REQUIRE_ACCESS_CODE = False


class UnconfiguredSecretConfig(TestingConfig):
    ACCESS_CODE = None


@pytest.fixture(params=["memory", "database"])
def app(request):
    storage = MemoryStorage() if request.param == "memory" else DatabaseStorage()
    app = create_app(TestingConfig, storage=storage)

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def db_app():
    app = create_app(TestingConfig, storage=DatabaseStorage())

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def create_entry(client):
    """POST a new app with a valid access code and return the response"""

    def _create(name="GitHub", url="https://github.com", category=None, **extra):
        payload = {"name": name, "url": url, "category": category, "accessCode": ACCESS_CODE}
        payload.update(extra)
        return client.post("/api/apps", json=payload)

    return _create


class FlaskSessionAdapter:
    """Routes LauncherAPI calls through a Flask test client instead of the network"""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append((method, url, json))
        kwargs = {"method": method}
        if json is not None:
            kwargs["json"] = json
        return AdaptedResponse(self.test_client.open(url, **kwargs))


class AdaptedResponse:

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.reason = response.status.split(" ", 1)[-1]

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("Response is not JSON")
        return data
