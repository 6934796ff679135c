# server/launcher/routes/apps.py

import logging
import secrets

from flask import Blueprint, request, current_app

from launcher.extensions import limiter
from launcher.services.storage import StorageError
from launcher.utils.validators import AppValidator

apps_bp = Blueprint("apps", __name__)
logger = logging.getLogger(__name__)


def api_response():
    return current_app.api_response


def storage():
    return current_app.storage


def create_rate_limit():
    return current_app.config.get("CREATE_RATE_LIMIT", "30 per minute")


def check_access_code(access_code):
    """Return an error response when the shared secret check fails, else None"""
    if not current_app.config.get("REQUIRE_ACCESS_CODE", True):
        return None

    expected = current_app.config.get("ACCESS_CODE")

    if not expected:
        logger.error("ACCESS_CODE is not configured; refusing to create apps")
        return api_response().error("Access code not configured on server", 500, "ACCESS_CODE_NOT_CONFIGURED")

    if not isinstance(access_code, str) or not secrets.compare_digest(access_code.encode("utf-8"), expected.encode("utf-8")):
        logger.warning(f"Rejected app creation with invalid access code from {request.remote_addr}")
        return api_response().error("Invalid access code", 403, "INVALID_ACCESS_CODE")

    return None


@apps_bp.route("", methods=["GET"])
def get_apps():
    try:
        apps = storage().list()
    except StorageError as e:
        logger.error(f"Error fetching apps: {e}")
        return api_response().error("Failed to fetch apps", 500)

    return api_response().success(data=[app.to_dict() for app in apps])


@apps_bp.route("", methods=["POST"])
@limiter.limit(create_rate_limit)
def create_app_entry():
    data = request.get_json(silent=True)

    payload = dict(data) if isinstance(data, dict) else data
    access_code = payload.pop("accessCode", None) if isinstance(payload, dict) else None

    denied = check_access_code(access_code)
    if denied:
        return denied

    validated, errors = AppValidator.validate_create(payload)
    if errors:
        return api_response().error("Invalid app data", 400, "INVALID_APP_DATA", details=errors)

    try:
        app = storage().create(validated)
    except StorageError as e:
        logger.error(f"App creation failed: {e}")
        return api_response().error("Failed to create app", 500)

    logger.info(f"App created: {app.id} ({app.name})")

    return api_response().success(data=app.to_dict(), status=201)


@apps_bp.route("/<app_id>", methods=["DELETE"])
def delete_app_entry(app_id: str):
    try:
        deleted = storage().delete(app_id)
    except StorageError as e:
        logger.error(f"App deletion failed: {e}")
        return api_response().error("Failed to delete app", 500)

    if not deleted:
        return api_response().error("App not found", 404, "NOT_FOUND")

    logger.info(f"App deleted: {app_id}")

    return api_response().success()


@apps_bp.route("/positions", methods=["PATCH"])
def update_positions():
    updates, errors = AppValidator.validate_positions(request.get_json(silent=True))
    if errors:
        return api_response().error("Invalid position data", 400, "INVALID_POSITION_DATA", details=errors)

    try:
        storage().update_positions(updates)
    except StorageError as e:
        logger.error(f"Position update failed: {e}")
        return api_response().error("Failed to update positions", 500)

    logger.info(f"Updated positions for {len(updates)} apps")

    return api_response().success()
