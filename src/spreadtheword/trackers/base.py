"""Base class and result type for tracker resolvers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests
import structlog

from spreadtheword.errors import ResolutionError
from spreadtheword.models import GitlabIssue, WrikeTask

logger = structlog.get_logger(__name__)

Issue = Union[GitlabIssue, WrikeTask]


@dataclass(frozen=True)
class Resolution:
    """Outcome of a tracker lookup: exactly one of ``issue`` or ``error`` is set."""

    issue: Optional[Issue] = None
    error: Optional[ResolutionError] = None

    @property
    def ok(self) -> bool:
        return self.issue is not None

    @classmethod
    def success(cls, issue: Issue) -> "Resolution":
        return cls(issue=issue)

    @classmethod
    def failure(cls, error: ResolutionError) -> "Resolution":
        return cls(error=error)


class BaseResolver(ABC):
    """Abstract base class for tracker resolvers."""

    name: str = "tracker"

    @abstractmethod
    def resolve(self, *key: Any) -> Issue:
        """Look up a tracker item.

        Raises:
            ResolutionError: If the item cannot be resolved for any reason
        """
        pass

    def try_resolve(self, *key: Any) -> Resolution:
        """Like ``resolve`` but returns the failure instead of raising it."""
        try:
            return Resolution.success(self.resolve(*key))
        except ResolutionError as e:
            return Resolution.failure(e)
        except Exception as e:
            # Unexpected failures are still resolution failures to the caller
            return Resolution.failure(ResolutionError(self.name, key, f"unexpected error: {e}"))


def get_json(
    session: requests.Session,
    url: str,
    tracker: str,
    key: Any,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = 10.0,
) -> Any:
    """GET ``url`` and decode the JSON body, mapping every failure to ResolutionError."""
    try:
        response = session.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise ResolutionError(tracker, key, f"transport error: {e}") from e

    if response.status_code == 404:
        raise ResolutionError(tracker, key, "not found")
    if response.status_code != 200:
        raise ResolutionError(tracker, key, f"HTTP {response.status_code}")

    try:
        return response.json()
    except ValueError as e:
        raise ResolutionError(tracker, key, "malformed JSON response") from e
