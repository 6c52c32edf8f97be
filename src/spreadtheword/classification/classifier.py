"""Groups commits into topics by the tracker item their subject references."""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

import structlog

from spreadtheword.classification.patterns import TagKind, TagMatch, match_tag
from spreadtheword.errors import ResolutionError
from spreadtheword.models import (
    OTHERS_TITLE,
    CommitRecord,
    GitlabIssue,
    Origin,
    Topic,
    TopicIndex,
    WrikeTask,
)
from spreadtheword.trackers import BaseResolver, GitlabResolver, Resolution, WrikeResolver
from spreadtheword.translation import Translator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Classification:
    """Where a single commit is filed."""

    identifier: Optional[str]
    origin: Origin
    payload: Optional[Union[GitlabIssue, WrikeTask]]
    title: str


OTHERS = Classification(identifier=None, origin=Origin.PLAIN, payload=None, title=OTHERS_TITLE)


class TopicClassifier:
    """Classifies commits and appends them to a TopicIndex.

    Any failure to resolve a referenced tracker item files the commit under
    Others and processing continues with the next commit.
    """

    def __init__(
        self,
        gitlab: Optional[GitlabResolver] = None,
        wrike: Optional[WrikeResolver] = None,
        translator: Optional[Translator] = None,
        index: Optional[TopicIndex] = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            gitlab: GitLab resolver, or None when GitLab is not configured
            wrike: Wrike resolver, or None when Wrike is not configured
            translator: Optional translator for non-ASCII titles
            index: Index to append to (a new one by default)
        """
        self.gitlab = gitlab
        self.wrike = wrike
        self.translator = translator
        self.index = index if index is not None else TopicIndex()

    def classify(self, commit: CommitRecord) -> Classification:
        """Work out the topic for ``commit`` without recording it."""
        match = match_tag(commit.original_message)
        if match is None:
            return OTHERS

        if match.kind is TagKind.WRIKE:
            origin = Origin.WRIKE
            identifier = f"W{match.number}"
            resolution = self._resolve(self.wrike, "wrike", match.number)
        else:
            origin = Origin.GITLAB
            project_id = self._target_project(match, commit)
            if project_id is None:
                identifier = None
                resolution = Resolution.failure(
                    ResolutionError("gitlab", match.number, "commit has no GitLab project")
                )
            else:
                number = int(match.number)
                identifier = f"{project_id}#{number}"
                resolution = self._resolve(self.gitlab, "gitlab", project_id, number)

        if not resolution.ok:
            logger.error(
                "Exception when parsing topic, filing under Others",
                identifier=identifier,
                author=commit.author,
                subject=commit.original_message,
                reason=str(resolution.error),
            )
            return OTHERS

        title = resolution.issue.title
        if self.translator is not None:
            title = self.translator.translate_if_needed(title)
        return Classification(identifier=identifier, origin=origin, payload=resolution.issue, title=title)

    def add(self, commit: CommitRecord) -> Topic:
        """Classify ``commit`` and append it to the index."""
        result = self.classify(commit)
        return self.index.add(result.identifier, result.origin, commit, result.payload, result.title)

    def classify_all(self, commits: Iterable[CommitRecord]) -> TopicIndex:
        """Classify commits in order and return the populated index."""
        for commit in commits:
            self.add(commit)

        others = self.index.others
        logger.info(
            "Classified commits",
            commits=self.index.commit_count(),
            topics=len(self.index),
            others=len(others.entries) if others is not None else 0,
        )
        return self.index

    @staticmethod
    def _target_project(match: TagMatch, commit: CommitRecord) -> Optional[str]:
        if match.kind is TagKind.GITLAB_CROSS and match.namespace:
            return f"{match.namespace}/{match.project}"
        if commit.project_ref is None:
            return None
        if match.kind is TagKind.GITLAB_CROSS:
            return f"{commit.project_ref.namespace}/{match.project}"
        return commit.project_ref.path

    @staticmethod
    def _resolve(resolver: Optional[BaseResolver], tracker: str, *key: Any) -> Resolution:
        if resolver is None:
            return Resolution.failure(ResolutionError(tracker, key, "tracker is not configured"))
        return resolver.try_resolve(*key)
