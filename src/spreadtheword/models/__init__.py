"""Data models for changelog generation."""

from spreadtheword.models.commit import CommitRecord, ProjectRef
from spreadtheword.models.config import (
    ChangelogConfig,
    GitlabConfig,
    Settings,
    TranslateConfig,
    WrikeConfig,
)
from spreadtheword.models.topic import (
    OTHERS_TITLE,
    GitlabIssue,
    Origin,
    Topic,
    TopicEntry,
    TopicIndex,
    TrackerIssue,
    WrikeTask,
)

__all__ = [
    "CommitRecord",
    "ProjectRef",
    "ChangelogConfig",
    "GitlabConfig",
    "WrikeConfig",
    "TranslateConfig",
    "Settings",
    "OTHERS_TITLE",
    "Origin",
    "GitlabIssue",
    "WrikeTask",
    "TrackerIssue",
    "Topic",
    "TopicEntry",
    "TopicIndex",
]
