# server/launcher/client/api.py

import logging
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)


class LauncherAPIError(Exception):

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.status_code}: {self.message}"
        return self.message


class LauncherAPI:
    """Thin wrapper over the launcher's JSON endpoints"""

    def __init__(self, base_url: str, session=None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, json=None):
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise LauncherAPIError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            message = payload.get("error") if isinstance(payload, dict) else None
            raise LauncherAPIError(message or response.reason or "Request failed", response.status_code, payload)

        return response.json()

    def health(self) -> dict:
        return self._request("GET", "/health")

    def list_apps(self) -> List[dict]:
        return self._request("GET", "/api/apps")

    def create_app(
        self,
        name: str,
        url: str,
        category: Optional[str] = None,
        access_code: Optional[str] = None,
    ) -> dict:
        payload = {"name": name, "url": url, "category": category}
        if access_code is not None:
            payload["accessCode"] = access_code
        return self._request("POST", "/api/apps", json=payload)

    def delete_app(self, app_id: str) -> dict:
        return self._request("DELETE", f"/api/apps/{app_id}")

    def update_positions(self, updates: List[dict]) -> dict:
        return self._request("PATCH", "/api/apps/positions", json=updates)
