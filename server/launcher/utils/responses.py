# server/launcher/utils/responses.py

from typing import Any, Optional

from flask import jsonify


class ApiResponse:
    """JSON response builder attached to the app as ``app.api_response``"""

    def success(self, data: Any = None, status: int = 200):
        if data is None:
            data = {"success": True}
        return jsonify(data), status

    def error(
        self,
        message: str,
        status: int = 400,
        code: Optional[str] = None,
        details: Any = None,
    ):
        body = {
            "success": False,
            "error": message,
        }
        if code:
            body["code"] = code
        if details is not None:
            body["details"] = details
        return jsonify(body), status
