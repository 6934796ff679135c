# server/launcher/routes/pages.py

import logging

from flask import Blueprint, request, current_app, render_template

from launcher.client.view import ALL_CATEGORIES, derive_state
from launcher.services.storage import StorageError
from launcher.utils.helpers import get_app_initials, get_domain_name, get_favicon_url, slugify_label

pages_bp = Blueprint("pages", __name__)
logger = logging.getLogger(__name__)


@pages_bp.app_template_filter("favicon")
def favicon_filter(url: str) -> str:
    return get_favicon_url(url)


@pages_bp.app_template_filter("domain")
def domain_filter(url: str) -> str:
    return get_domain_name(url)


@pages_bp.app_template_filter("initials")
def initials_filter(name: str) -> str:
    return get_app_initials(name)


@pages_bp.app_template_filter("slug")
def slug_filter(label: str) -> str:
    return slugify_label(label)


@pages_bp.route("/", methods=["GET"])
def launcher_page():
    search_query = request.args.get("q", "").strip()
    selected_category = request.args.get("category", ALL_CATEGORIES)

    try:
        apps = [app.to_dict() for app in current_app.storage.list()]
    except StorageError as e:
        logger.error(f"Error fetching apps for launcher page: {e}")
        return render_template("launcher.html", state=None, error="Failed to load apps"), 500

    state = derive_state(apps, search_query, selected_category)

    return render_template(
        "launcher.html",
        state=state,
        error=None,
        access_code_required=current_app.config.get("REQUIRE_ACCESS_CODE", True),
    )
