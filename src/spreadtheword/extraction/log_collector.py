"""Commit log collection across one or more project checkouts."""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import git
import structlog
from git import Repo

from spreadtheword.models import CommitRecord, ProjectRef
from spreadtheword.translation import Translator, needs_translation

logger = structlog.get_logger(__name__)

# Separates author from subject in each log line; chosen to never occur in either.
DELIMITER = "__spreadtheword__"

# Upper bound of the revision range when a lower bound is given.
DEFAULT_BRANCH = "master"

LOG_FORMAT = f"--pretty=format:%an{DELIMITER}%s"


def parse_log_line(line: str) -> Tuple[str, str]:
    """Split one ``author<DELIMITER>subject`` line.

    A missing or whitespace-only subject comes back as ``""``.
    """
    author, _, subject = line.partition(DELIMITER)
    if not subject.strip():
        subject = ""
    return author, subject


def parse_log(text: str, project_ref: Optional[ProjectRef] = None) -> List[CommitRecord]:
    """Turn raw log output into commit records, preserving log order.

    Blank lines are dropped before parsing.
    """
    records = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        author, subject = parse_log_line(line.rstrip("\r"))
        records.append(
            CommitRecord(author=author, original_message=subject, project_ref=project_ref)
        )
    return records


def project_ref_from_remotes(urls: Iterable[str], host: str) -> Optional[ProjectRef]:
    """Derive the GitLab project from the first remote URL pointing at ``host``.

    Handles both ``https://host/ns/name.git`` and ``git@host:ns/name.git``.
    Nested groups end up in the namespace (``group/sub``).
    """
    if not host:
        return None

    pattern = re.compile(
        r"(?:^|[@/])" + re.escape(host) + r"(?::\d+)?[:/](?P<path>.+)$", re.IGNORECASE
    )
    for url in urls:
        match = pattern.search(url.strip())
        if not match:
            continue
        path = match.group("path").strip("/")
        if path.endswith(".git"):
            path = path[: -len(".git")]
        namespace, _, name = path.rpartition("/")
        if namespace and name:
            return ProjectRef(namespace=namespace, name=name)
    return None


def git_user_name(path: Path) -> str:
    """Return ``user.name`` from the git config visible in ``path``, or ``""``."""
    try:
        reader = Repo(path, search_parent_directories=True).config_reader()
        return str(reader.get_value("user", "name", default="")).strip()
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
        return ""


class LogCollector:
    """Reads commit subjects from git checkouts and tags them with their project."""

    def __init__(
        self,
        gitlab_host: Optional[str] = None,
        translator: Optional[Translator] = None,
    ) -> None:
        """Initialize the collector.

        Args:
            gitlab_host: Host name of the GitLab instance, or None when GitLab is disabled
            translator: Optional translator applied to non-ASCII subjects
        """
        self.gitlab_host = gitlab_host
        self.translator = translator

    def collect(self, projects: Iterable[Path], since: Optional[str] = None) -> List[CommitRecord]:
        """Collect commits from every project, in project order then log order."""
        commits: List[CommitRecord] = []
        for project in projects:
            commits.extend(self.collect_project(Path(project), since=since))
        return commits

    def collect_project(self, path: Path, since: Optional[str] = None) -> List[CommitRecord]:
        """Collect commits from a single checkout.

        Raises:
            ValueError: If ``path`` is not a git repository
        """
        logger.info("Fetching git commit logs", project=str(path))
        repo = self._open_repo(path)

        project_ref = None
        if self.gitlab_host:
            project_ref = project_ref_from_remotes(self._remote_urls(repo), self.gitlab_host)
            if project_ref is None:
                logger.warning("No remote matches GitLab host", project=str(path), host=self.gitlab_host)

        commits = parse_log(self.read_log(repo, since), project_ref)
        if self.translator is not None:
            for commit in commits:
                self._translate(commit)

        logger.debug("Collected commits", project=str(path), count=len(commits))
        return commits

    def read_log(self, repo: Repo, since: Optional[str] = None) -> str:
        """Run ``git log`` with the author/subject format.

        A checkout without any commits yields an empty log.
        """
        if not repo.head.is_valid():
            logger.warning("Repository has no commits yet", project=repo.working_dir)
            return ""
        args = [LOG_FORMAT]
        if since:
            args.append(f"{since}..{DEFAULT_BRANCH}")
        return repo.git.log(*args)

    def _translate(self, commit: CommitRecord) -> None:
        if not needs_translation(commit.original_message):
            return
        translated = self.translator.translate_if_needed(commit.original_message)
        if translated != commit.original_message:
            commit.set_translation(translated)

    @staticmethod
    def _open_repo(path: Path) -> Repo:
        if not path.exists():
            raise ValueError(f"Repository path does not exist: {path}")
        try:
            return Repo(path, search_parent_directories=True)
        except git.exc.InvalidGitRepositoryError as e:
            raise ValueError(f"Invalid Git repository: {path}") from e

    @staticmethod
    def _remote_urls(repo: Repo) -> List[str]:
        urls = []
        for remote in repo.remotes:
            urls.extend(remote.urls)
        return urls
