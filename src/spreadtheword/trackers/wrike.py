"""Wrike task lookups by permalink."""

from typing import Any, Dict, List, Optional

import requests
import structlog

from spreadtheword.cache import LookupCache
from spreadtheword.errors import ResolutionError
from spreadtheword.models import WrikeConfig, WrikeTask
from spreadtheword.trackers.base import BaseResolver, get_json

logger = structlog.get_logger(__name__)

PERMALINK_TEMPLATE = "https://www.wrike.com/open.htm?id={short_id}"


def build_permalink(short_id: str) -> str:
    return PERMALINK_TEMPLATE.format(short_id=short_id)


class WrikeClient:
    """Minimal Wrike REST v4 client."""

    def __init__(self, config: WrikeConfig, session: Optional[requests.Session] = None) -> None:
        self.base_url = config.api_url.rstrip("/")
        self.timeout = config.timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {config.token}",
                "Accept": "application/json",
            }
        )

    def search_by_permalink(self, permalink: str) -> List[Dict[str, Any]]:
        """Return tasks matching ``permalink`` (normally zero or one)."""
        data = get_json(
            self.session,
            f"{self.base_url}/tasks",
            "wrike",
            permalink,
            params={"permalink": permalink},
            timeout=self.timeout,
        )
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            raise ResolutionError("wrike", permalink, "search response has no data list")
        return data["data"]

    def fetch_details(self, task_id: str) -> Dict[str, Any]:
        """Return the full task record for an internal task id."""
        data = get_json(self.session, f"{self.base_url}/tasks/{task_id}", "wrike", task_id, timeout=self.timeout)
        tasks = data.get("data") if isinstance(data, dict) else None
        if not isinstance(tasks, list) or not tasks or not isinstance(tasks[0], dict):
            raise ResolutionError("wrike", task_id, "task details response is empty")
        return tasks[0]


class WrikeResolver(BaseResolver):
    """Resolves ``W<digits>`` short ids.

    The short id only appears in the task permalink, so resolution is a
    permalink search followed by a details fetch. Results are cached under
    the short id, not the internal task id.
    """

    name = "wrike"

    def __init__(self, client: WrikeClient, cache: Optional[LookupCache[WrikeTask]] = None) -> None:
        self.client = client
        self.cache: LookupCache[WrikeTask] = cache if cache is not None else LookupCache("wrike")

    def resolve(self, short_id: str) -> WrikeTask:
        short_id = str(short_id)
        return self.cache.get_or_fetch(short_id, lambda: self._fetch(short_id))

    def _fetch(self, short_id: str) -> WrikeTask:
        permalink = build_permalink(short_id)
        logger.info("Fetching Wrike task", permalink=permalink)

        tasks = self.client.search_by_permalink(permalink)
        if not tasks:
            raise ResolutionError(self.name, short_id, "no task matches permalink")
        task_id = tasks[0].get("id") if isinstance(tasks[0], dict) else None
        if not task_id:
            raise ResolutionError(self.name, short_id, "search result has no task id")

        details = self.client.fetch_details(task_id)
        title = details.get("title")
        if not isinstance(title, str):
            raise ResolutionError(self.name, short_id, "task has no title")

        logger.debug("Fetched Wrike task", short_id=short_id, task_id=task_id)
        return WrikeTask(
            id=str(task_id),
            short_id=short_id,
            permalink=permalink,
            title=title,
            raw=details,
        )
