"""GitLab issue lookups."""

from typing import Any, Dict, Optional, Union
from urllib.parse import quote

import requests
import structlog

from spreadtheword.cache import LookupCache
from spreadtheword.errors import ResolutionError
from spreadtheword.models import GitlabConfig, GitlabIssue
from spreadtheword.trackers.base import BaseResolver, get_json

logger = structlog.get_logger(__name__)


class GitlabClient:
    """Minimal GitLab REST v4 client."""

    def __init__(self, config: GitlabConfig, session: Optional[requests.Session] = None) -> None:
        """Initialize GitLab client.

        Args:
            config: Endpoint, token and timeout
            session: Optional pre-configured session (tests inject a mock)
        """
        self.base_url = config.endpoint.rstrip("/")
        self.timeout = config.timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "PRIVATE-TOKEN": config.token,
                "Accept": "application/json",
            }
        )

    def fetch_issue(self, project_id: str, number: int) -> Dict[str, Any]:
        """Fetch a single issue by project path and issue number.

        Raises:
            ResolutionError: On not-found, transport or payload errors
        """
        url = f"{self.base_url}/projects/{quote(project_id, safe='')}/issues/{number}"
        data = get_json(self.session, url, "gitlab", (project_id, number), timeout=self.timeout)
        if not isinstance(data, dict) or not isinstance(data.get("title"), str):
            raise ResolutionError("gitlab", (project_id, number), "issue payload has no title")
        return data


class GitlabResolver(BaseResolver):
    """Resolves ``(project, number)`` references, fetching each at most once per run."""

    name = "gitlab"

    def __init__(self, client: GitlabClient, cache: Optional[LookupCache[GitlabIssue]] = None) -> None:
        self.client = client
        self.cache: LookupCache[GitlabIssue] = cache if cache is not None else LookupCache("gitlab")

    def resolve(self, project_id: str, number: Union[int, str]) -> GitlabIssue:
        try:
            number = int(number)
        except (TypeError, ValueError) as e:
            raise ResolutionError(self.name, (project_id, number), "issue number is not an integer") from e

        key = (project_id, number)
        return self.cache.get_or_fetch(key, lambda: self._fetch(project_id, number))

    def _fetch(self, project_id: str, number: int) -> GitlabIssue:
        logger.debug("Fetching GitLab issue", project=project_id, number=number)
        data = self.client.fetch_issue(project_id, number)
        return GitlabIssue(
            project_id=project_id,
            number=number,
            title=data["title"],
            web_url=data.get("web_url"),
            raw=data,
        )
