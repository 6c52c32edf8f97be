"""Commit classification into changelog topics."""

from spreadtheword.classification.classifier import OTHERS, Classification, TopicClassifier
from spreadtheword.classification.patterns import TagKind, TagMatch, match_tag

__all__ = ["OTHERS", "Classification", "TopicClassifier", "TagKind", "TagMatch", "match_tag"]
