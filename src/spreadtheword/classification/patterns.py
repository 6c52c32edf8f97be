"""Recognition of tracker tags in commit subjects.

Tags are brace-delimited. Checked in this order, first match wins:

    {W#123}          Wrike task with short id 123
    {#42}            GitLab issue 42 in the commit's own project
    {app#42}         GitLab issue 42 in project ``app`` of the commit's namespace
    {other/repo#7}   GitLab issue 7 in ``other/repo``
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TagKind(str, Enum):
    WRIKE = "wrike"
    GITLAB_LOCAL = "gitlab_local"
    GITLAB_CROSS = "gitlab_cross"


WRIKE_TAG = re.compile(r"\{W#(?P<number>\d+)\}")
GITLAB_LOCAL_TAG = re.compile(r"\{#(?P<number>\d+)\}")
GITLAB_CROSS_TAG = re.compile(r"\{(?P<qualifier>[^{}#\s]+)#(?P<number>\d+)\}")


@dataclass(frozen=True)
class TagMatch:
    """A recognized tag.

    ``namespace`` is only set when the tag names one explicitly; ``project``
    is only set for cross-project tags.
    """

    kind: TagKind
    number: str
    namespace: Optional[str] = None
    project: Optional[str] = None


def match_wrike(subject: str) -> Optional[TagMatch]:
    m = WRIKE_TAG.search(subject)
    if m is None:
        return None
    return TagMatch(kind=TagKind.WRIKE, number=m.group("number"))


def match_gitlab_local(subject: str) -> Optional[TagMatch]:
    m = GITLAB_LOCAL_TAG.search(subject)
    if m is None:
        return None
    return TagMatch(kind=TagKind.GITLAB_LOCAL, number=m.group("number"))


def match_gitlab_cross(subject: str) -> Optional[TagMatch]:
    m = GITLAB_CROSS_TAG.search(subject)
    if m is None:
        return None
    namespace, _, project = m.group("qualifier").rpartition("/")
    return TagMatch(
        kind=TagKind.GITLAB_CROSS,
        number=m.group("number"),
        namespace=namespace or None,
        project=project,
    )


MATCHERS = (match_wrike, match_gitlab_local, match_gitlab_cross)


def match_tag(subject: Optional[str]) -> Optional[TagMatch]:
    """Return the first tag found in ``subject``, trying each kind in precedence order."""
    if not subject:
        return None
    for matcher in MATCHERS:
        result = matcher(subject)
        if result is not None:
            return result
    return None
