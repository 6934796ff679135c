# server/launcher/client/view.py

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from launcher.client.api import LauncherAPI, LauncherAPIError

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"
UNCATEGORIZED = "uncategorized"
UNCATEGORIZED_LABEL = "Uncategorized"


def sort_by_position(apps: List[dict]) -> List[dict]:
    return sorted(apps, key=lambda app: app["position"])


def search_apps(apps: List[dict], query: str) -> List[dict]:
    if not query:
        return list(apps)

    query = query.lower()
    return [
        app for app in apps
        if query in app["name"].lower() or query in app["url"].lower()
    ]


def filter_by_category(apps: List[dict], category: str) -> List[dict]:
    if category == ALL_CATEGORIES:
        return list(apps)
    if category == UNCATEGORIZED:
        return [app for app in apps if not app.get("category")]
    return [app for app in apps if app.get("category") == category]


def list_categories(apps: List[dict]) -> List[str]:
    return sorted({app["category"] for app in apps if app.get("category")})


def _group_sort_key(label: str) -> Tuple[int, str, str]:
    return (1 if label == UNCATEGORIZED_LABEL else 0, label.casefold(), label)


def group_by_category(apps: List[dict]) -> List[Tuple[str, List[dict]]]:
    """Bucket apps by category label, alphabetically, with Uncategorized last"""
    groups: Dict[str, List[dict]] = {}
    for app in apps:
        groups.setdefault(app.get("category") or UNCATEGORIZED_LABEL, []).append(app)

    return sorted(groups.items(), key=lambda item: _group_sort_key(item[0]))


def is_drag_enabled(category: str, search_query: str) -> bool:
    return category == ALL_CATEGORIES and not search_query


def move_item(items: list, old_index: int, new_index: int) -> list:
    items = list(items)
    items.insert(new_index, items.pop(old_index))
    return items


def compute_reorder(apps: List[dict], active_id: str, over_id: Optional[str]) -> Optional[List[dict]]:
    """
    Work out the position updates for dropping ``active_id`` onto ``over_id``.

    ``apps`` is the full list sorted by position. Every entry is given a dense
    position equal to its new index. Returns None when the drop is a no-op.
    """
    if over_id is None or active_id == over_id:
        return None

    ids = [app["id"] for app in apps]
    if active_id not in ids or over_id not in ids:
        return None

    reordered = move_item(apps, ids.index(active_id), ids.index(over_id))
    return [{"id": app["id"], "position": index} for index, app in enumerate(reordered)]


@dataclass
class LauncherState:
    """Everything the launcher page renders, derived from one app list"""

    apps: List[dict]
    filtered_apps: List[dict]
    groups: List[Tuple[str, List[dict]]]
    categories: List[str]
    search_query: str = ""
    selected_category: str = ALL_CATEGORIES
    drag_enabled: bool = False

    @property
    def is_grouped(self) -> bool:
        return self.selected_category == ALL_CATEGORIES

    @property
    def summary(self) -> str:
        count = len(self.filtered_apps)
        if self.search_query and count != len(self.apps):
            return f"Showing {count} of {len(self.apps)} apps"
        return f"{count} app{'' if count == 1 else 's'}"


def derive_state(apps: List[dict], search_query: str = "", selected_category: str = ALL_CATEGORIES) -> LauncherState:
    drag_enabled = is_drag_enabled(selected_category, search_query)

    # Position order only applies to the unfiltered view
    ordered = sort_by_position(apps) if drag_enabled else list(apps)

    searched = search_apps(ordered, search_query)
    filtered = filter_by_category(searched, selected_category)
    groups = group_by_category(searched) if selected_category == ALL_CATEGORIES else []

    return LauncherState(
        apps=ordered,
        filtered_apps=filtered,
        groups=groups,
        categories=list_categories(apps),
        search_query=search_query,
        selected_category=selected_category,
        drag_enabled=drag_enabled,
    )


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"


def _empty_form() -> dict:
    return {"name": "", "url": "", "category": ""}


@dataclass
class LauncherView:
    """
    Client-side launcher state: cached list, filters and mutation flows.

    The cached list is refetched lazily after every successful mutation.
    Failed mutations leave the cache untouched and record a notification.
    """

    api: LauncherAPI
    search_query: str = ""
    selected_category: str = ALL_CATEGORIES
    access_code: Optional[str] = None

    form: dict = field(default_factory=_empty_form)
    add_dialog_open: bool = False
    app_to_delete: Optional[dict] = None
    notifications: List[Notification] = field(default_factory=list)

    creating: bool = False
    deleting: bool = False
    reordering: bool = False

    _cache: Optional[List[dict]] = field(default=None, repr=False)

    @property
    def apps(self) -> List[dict]:
        """Cached app list; a failed refresh raises LauncherAPIError and leaves the cache empty"""
        if self._cache is None:
            self._cache = self.api.list_apps()
        return self._cache

    def invalidate(self) -> None:
        self._cache = None

    @property
    def state(self) -> LauncherState:
        return derive_state(self.apps, self.search_query, self.selected_category)

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        self.notifications.append(Notification(title, description, variant))

    def open_add_dialog(self) -> None:
        self.add_dialog_open = True

    def submit_create(self, form: Optional[dict] = None) -> Optional[dict]:
        if self.creating:
            return None
        if form is not None:
            self.form = dict(form)

        self.creating = True
        try:
            created = self.api.create_app(
                name=self.form.get("name", ""),
                url=self.form.get("url", ""),
                category=self.form.get("category") or None,
                access_code=self.access_code,
            )
        except LauncherAPIError as e:
            logger.warning(f"Create failed: {e}")
            self.notify(
                "Failed to add app",
                "There was an error adding your app. Please try again.",
                "destructive",
            )
            return None
        finally:
            self.creating = False

        self.invalidate()
        self.form = _empty_form()
        self.add_dialog_open = False
        self.notify("App added successfully", "Your app has been added to the launcher.")
        return created

    def request_delete(self, app: dict) -> None:
        self.app_to_delete = app

    def cancel_delete(self) -> None:
        self.app_to_delete = None

    def confirm_delete(self) -> bool:
        if self.app_to_delete is None or self.deleting:
            return False

        self.deleting = True
        try:
            self.api.delete_app(self.app_to_delete["id"])
        except LauncherAPIError as e:
            logger.warning(f"Delete failed: {e}")
            self.notify(
                "Failed to delete app",
                "There was an error deleting the app. Please try again.",
                "destructive",
            )
            return False
        finally:
            self.deleting = False

        self.invalidate()
        self.app_to_delete = None
        self.notify("App deleted", "The app has been removed from your launcher.")
        return True

    def drop(self, active_id: str, over_id: Optional[str]) -> bool:
        """Handle the end of a drag; returns True when a reorder was sent and accepted"""
        if self.reordering:
            return False

        try:
            state = self.state
        except LauncherAPIError as e:
            logger.warning(f"Loading apps for reorder failed: {e}")
            self.notify(
                "Failed to load apps",
                "There was an error loading your apps. Please try again.",
                "destructive",
            )
            return False

        if not state.drag_enabled:
            return False

        updates = compute_reorder(state.apps, active_id, over_id)
        if updates is None:
            return False

        self.reordering = True
        try:
            self.api.update_positions(updates)
        except LauncherAPIError as e:
            logger.warning(f"Reorder failed: {e}")
            self.notify(
                "Failed to reorder apps",
                "There was an error saving the new order. Please try again.",
                "destructive",
            )
            return False
        finally:
            self.reordering = False

        self.invalidate()
        return True
