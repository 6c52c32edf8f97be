"""Issue tracker integrations (GitLab, Wrike)."""

from spreadtheword.trackers.base import BaseResolver, Resolution
from spreadtheword.trackers.gitlab import GitlabClient, GitlabResolver
from spreadtheword.trackers.wrike import WrikeClient, WrikeResolver, build_permalink

__all__ = [
    "BaseResolver",
    "Resolution",
    "GitlabClient",
    "GitlabResolver",
    "WrikeClient",
    "WrikeResolver",
    "build_permalink",
]
