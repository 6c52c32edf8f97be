"""Memoized translation of non-ASCII commit text via Google Translate."""

import re
from typing import Optional

import requests
import structlog
from pydantic import BaseModel, Field

from spreadtheword.cache import LookupCache
from spreadtheword.errors import TranslationError
from spreadtheword.models import TranslateConfig

logger = structlog.get_logger(__name__)

TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"

NON_ASCII = re.compile(r"[^\x00-\x7F]")


def needs_translation(text: Optional[str]) -> bool:
    """True when ``text`` contains at least one character outside 7-bit ASCII."""
    return bool(text) and NON_ASCII.search(text) is not None


class TranslationResult(BaseModel):
    """Translated text as returned by the service."""

    text: str = Field(..., description="Translated text")
    source_language: Optional[str] = Field(None, description="Detected source language code")


class GoogleTranslateClient:
    """Client for the Google Cloud Translation v2 REST API."""

    def __init__(self, config: TranslateConfig, session: Optional[requests.Session] = None) -> None:
        self.api_key = config.api_key
        self.target = config.target
        self.timeout = config.timeout
        self.session = session or requests.Session()

    def translate(self, text: str) -> TranslationResult:
        """Translate ``text`` into the configured target language.

        Raises:
            TranslationError: On transport errors or an unexpected payload
        """
        params = {"key": self.api_key}
        body = {"q": text, "target": self.target, "format": "text"}
        try:
            response = self.session.post(TRANSLATE_URL, params=params, data=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise TranslationError(text, f"transport error: {e}", e) from e

        if response.status_code != 200:
            raise TranslationError(text, f"HTTP {response.status_code}")

        try:
            translation = response.json()["data"]["translations"][0]
            return TranslationResult(
                text=translation["translatedText"],
                source_language=translation.get("detectedSourceLanguage"),
            )
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslationError(text, "malformed response", e) from e


class Translator:
    """Translates text at most once per distinct input string."""

    def __init__(
        self,
        client: GoogleTranslateClient,
        cache: Optional[LookupCache[TranslationResult]] = None,
    ) -> None:
        self.client = client
        self.cache: LookupCache[TranslationResult] = (
            cache if cache is not None else LookupCache("translation")
        )

    def translate(self, text: str) -> TranslationResult:
        """Return the cached translation of ``text``, fetching it on first use.

        Raises:
            TranslationError: If the service call fails (the failure is not cached)
        """
        return self.cache.get_or_fetch(text, lambda: self._fetch(text))

    def _fetch(self, text: str) -> TranslationResult:
        logger.info("Translating", text=text)
        result = self.client.translate(text)
        logger.info("Translated", text=result.text)
        return result

    def translate_if_needed(self, text: str) -> str:
        """Translate non-ASCII text, returning the input unchanged if the service fails."""
        if not needs_translation(text):
            return text
        try:
            return self.translate(text).text
        except TranslationError as e:
            logger.warning("Translation failed, keeping original text", text=text, reason=e.reason)
            return text
