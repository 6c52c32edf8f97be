"""End-to-end changelog generation: collect, classify, hand off."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import requests
import structlog

from spreadtheword.classification import TopicClassifier
from spreadtheword.extraction import LogCollector, git_user_name
from spreadtheword.models import ChangelogConfig, Settings, TopicIndex
from spreadtheword.trackers import GitlabClient, GitlabResolver, WrikeClient, WrikeResolver
from spreadtheword.translation import GoogleTranslateClient, TranslationResult, Translator

logger = structlog.get_logger(__name__)


@dataclass
class Changelog:
    """Everything a renderer needs to write the document."""

    title: str
    author: str
    topics: TopicIndex
    translate: Optional[Callable[[str], TranslationResult]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "topics": self.topics.to_dict(),
        }


class ChangelogGenerator:
    """Builds the per-run clients and caches from settings and runs the pipeline.

    Settings are validated up front, so a ConfigurationError is raised
    before any git or network access happens.
    """

    def __init__(
        self,
        config: ChangelogConfig,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Projects, revision bound and document labels
            settings: Integration settings (loaded from the environment if None)
            session: Optional HTTP session shared by all clients

        Raises:
            ConfigurationError: If an enabled integration is incomplete
        """
        self.config = config
        self.settings = settings or Settings()
        self.settings.validate_integrations()

        translate_config = self.settings.translate_config()
        self.translator: Optional[Translator] = None
        if translate_config is not None:
            self.translator = Translator(GoogleTranslateClient(translate_config, session=session))

        gitlab_config = self.settings.gitlab_config()
        self.gitlab: Optional[GitlabResolver] = None
        if gitlab_config is not None:
            self.gitlab = GitlabResolver(GitlabClient(gitlab_config, session=session))

        wrike_config = self.settings.wrike_config()
        self.wrike: Optional[WrikeResolver] = None
        if wrike_config is not None:
            self.wrike = WrikeResolver(WrikeClient(wrike_config, session=session))

        self.collector = LogCollector(
            gitlab_host=gitlab_config.host if gitlab_config is not None else None,
            translator=self.translator,
        )
        self.classifier = TopicClassifier(
            gitlab=self.gitlab,
            wrike=self.wrike,
            translator=self.translator,
        )

    @property
    def projects(self) -> List[Path]:
        return list(self.config.projects) or [Path.cwd()]

    def run(self) -> Changelog:
        """Collect commits from every project and group them into topics."""
        projects = self.projects
        commits = self.collector.collect(projects, since=self.config.since)
        topics = self.classifier.classify_all(commits)

        author = self.config.author or git_user_name(projects[0])
        return Changelog(
            title=self.config.title,
            author=author,
            topics=topics,
            translate=self.translator.translate if self.translator is not None else None,
        )

    def get_stats(self) -> Dict[str, dict]:
        """Cache statistics for every enabled integration."""
        stats = {}
        if self.gitlab is not None:
            stats["gitlab"] = self.gitlab.cache.get_stats()
        if self.wrike is not None:
            stats["wrike"] = self.wrike.cache.get_stats()
        if self.translator is not None:
            stats["translation"] = self.translator.cache.get_stats()
        return stats
