"""Exception hierarchy for changelog generation."""

from typing import Any, Optional


class SpreadTheWordError(Exception):
    """Base class for all spreadtheword errors."""


class ConfigurationError(SpreadTheWordError):
    """An integration is enabled but its credentials or endpoint are unusable."""


class ResolutionError(SpreadTheWordError):
    """A tracker reference could not be resolved.

    Covers not-found responses, malformed payloads and transport failures
    alike; callers are not expected to tell them apart.
    """

    def __init__(self, tracker: str, key: Any, reason: str) -> None:
        self.tracker = tracker
        self.key = key
        self.reason = reason
        super().__init__(f"{tracker} lookup failed for {key!r}: {reason}")


class TranslationError(SpreadTheWordError):
    """The translation service failed or returned an unusable payload."""

    def __init__(self, text: str, reason: str, cause: Optional[BaseException] = None) -> None:
        self.text = text
        self.reason = reason
        self.cause = cause
        super().__init__(f"Translation failed for {text[:40]!r}: {reason}")
