"""Data models for tracker payloads and the topic index."""

from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from spreadtheword.models.commit import CommitRecord

OTHERS_TITLE = "Others"


class Origin(str, Enum):
    """Where a topic's title came from."""

    PLAIN = "plain"
    GITLAB = "gitlab"
    WRIKE = "wrike"


class GitlabIssue(BaseModel):
    """An issue fetched from GitLab."""

    kind: Literal["gitlab"] = "gitlab"
    project_id: str = Field(..., description="Project path, e.g. teamx/app")
    number: int = Field(..., description="Project-scoped issue number (iid)")
    title: str = Field(..., description="Issue title")
    web_url: Optional[str] = Field(None, description="Browser URL of the issue")
    raw: Dict[str, Any] = Field(default_factory=dict, description="Untouched API payload")


class WrikeTask(BaseModel):
    """A task fetched from Wrike."""

    kind: Literal["wrike"] = "wrike"
    id: str = Field(..., description="Wrike internal task id")
    short_id: str = Field(..., description="Numeric id from the permalink")
    permalink: str = Field(..., description="Permalink the task was found by")
    title: str = Field(..., description="Task title")
    raw: Dict[str, Any] = Field(default_factory=dict, description="Untouched API payload")


TrackerIssue = Annotated[Union[GitlabIssue, WrikeTask], Field(discriminator="kind")]


class TopicEntry(BaseModel):
    """One commit filed under a topic."""

    origin: Origin
    commit: CommitRecord
    payload: Optional[TrackerIssue] = None
    title: str


class Topic(BaseModel):
    """A group of commits sharing one tracker item, or the Others bucket."""

    identifier: Optional[str] = Field(None, description="Topic key; None for Others")
    origin: Origin = Field(Origin.PLAIN, description="Origin of the first entry")
    title: str = Field(..., description="Title taken from the first entry")
    entries: List[TopicEntry] = Field(default_factory=list)

    @property
    def is_others(self) -> bool:
        return self.identifier is None


class TopicIndex:
    """Ordered mapping of topic identifier to Topic.

    All unclassified commits share the single ``None`` key. Topics iterate
    in the order their first commit was added.
    """

    def __init__(self) -> None:
        self._topics: Dict[Optional[str], Topic] = {}

    def add(
        self,
        identifier: Optional[str],
        origin: Origin,
        commit: CommitRecord,
        payload: Optional[Union[GitlabIssue, WrikeTask]],
        title: str,
    ) -> Topic:
        """Append a commit to the topic for ``identifier``, creating it if needed."""
        topic = self._topics.get(identifier)
        if topic is None:
            topic = Topic(identifier=identifier, origin=origin, title=title)
            self._topics[identifier] = topic
        topic.entries.append(
            TopicEntry(origin=origin, commit=commit, payload=payload, title=title)
        )
        return topic

    @property
    def others(self) -> Optional[Topic]:
        return self._topics.get(None)

    def get(self, identifier: Optional[str]) -> Optional[Topic]:
        return self._topics.get(identifier)

    def identifiers(self) -> List[Optional[str]]:
        return list(self._topics)

    def __getitem__(self, identifier: Optional[str]) -> Topic:
        return self._topics[identifier]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._topics

    def __iter__(self) -> Iterator[Topic]:
        return iter(self._topics.values())

    def __len__(self) -> int:
        return len(self._topics)

    def commit_count(self) -> int:
        return sum(len(topic.entries) for topic in self._topics.values())

    def to_dict(self) -> List[Dict[str, Any]]:
        """JSON-friendly dump, Others last."""
        named = [t for t in self._topics.values() if not t.is_others]
        if self.others is not None:
            named.append(self.others)
        return [topic.model_dump(mode="json") for topic in named]
