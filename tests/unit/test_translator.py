"""Tests for memoized translation."""

from unittest.mock import MagicMock

import pytest
import requests
from structlog.testing import capture_logs

from spreadtheword.errors import TranslationError
from spreadtheword.models import TranslateConfig
from spreadtheword.translation import (
    GoogleTranslateClient,
    TranslationResult,
    Translator,
    needs_translation,
)
from spreadtheword.translation.translator import TRANSLATE_URL


def make_response(status_code=200, payload=None):
    """Create a mock HTTP response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def session():
    """Create mock requests session."""
    return MagicMock()


@pytest.fixture
def google_client(session):
    return GoogleTranslateClient(TranslateConfig(api_key="key-123", timeout=3), session=session)


@pytest.fixture
def mock_client():
    """Create mock translation client."""
    client = MagicMock()
    client.translate.return_value = TranslationResult(text="Bug fix", source_language="es")
    return client


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Fix bug", False),
        ("", False),
        (None, False),
        ("Corrección de error", True),
        ("修复错误", True),
        ("tab\tand\nnewline", False),
    ],
)
def test_needs_translation(text, expected):
    """Test only text outside 7-bit ASCII needs translation."""
    assert needs_translation(text) is expected


def test_google_client_request(google_client, session):
    """Test the v2 API request shape."""
    session.post.return_value = make_response(
        payload={"data": {"translations": [{"translatedText": "Bug fix", "detectedSourceLanguage": "es"}]}}
    )

    result = google_client.translate("Corrección de error")

    assert result == TranslationResult(text="Bug fix", source_language="es")
    session.post.assert_called_once_with(
        TRANSLATE_URL,
        params={"key": "key-123"},
        data={"q": "Corrección de error", "target": "en", "format": "text"},
        timeout=3,
    )


@pytest.mark.parametrize(
    "response",
    [
        make_response(403, {"error": {"message": "forbidden"}}),
        make_response(200, {"data": {"translations": []}}),
        make_response(200, {"unexpected": True}),
    ],
)
def test_google_client_errors(google_client, session, response):
    """Test HTTP and payload errors raise TranslationError."""
    session.post.return_value = response

    with pytest.raises(TranslationError):
        google_client.translate("Corrección")


def test_google_client_transport_error(google_client, session):
    """Test connection errors raise TranslationError."""
    session.post.side_effect = requests.ConnectionError("offline")

    with pytest.raises(TranslationError, match="transport error"):
        google_client.translate("Corrección")


def test_translate_is_memoized(mock_client):
    """Test identical strings reach the service once."""
    translator = Translator(mock_client)

    first = translator.translate("Corrección de error")
    second = translator.translate("Corrección de error")

    assert first.text == "Bug fix"
    assert second is first
    mock_client.translate.assert_called_once_with("Corrección de error")


def test_translate_distinct_strings(mock_client):
    """Test different strings are translated separately."""
    translator = Translator(mock_client)

    translator.translate("uno")
    translator.translate("dos")

    assert mock_client.translate.call_count == 2


def test_translate_logs_progress(mock_client):
    """Test translating/translated events are emitted on a miss only."""
    translator = Translator(mock_client)

    with capture_logs() as logs:
        translator.translate("Corrección de error")
        translator.translate("Corrección de error")

    events = [entry["event"] for entry in logs]
    assert events == ["Translating", "Translated"]


def test_translate_if_needed_skips_ascii(mock_client):
    """Test ASCII text is returned untouched without a service call."""
    translator = Translator(mock_client)

    assert translator.translate_if_needed("Fix bug") == "Fix bug"
    mock_client.translate.assert_not_called()


def test_translate_if_needed_fails_open(mock_client):
    """Test a failing service keeps the original text and is retried later."""
    mock_client.translate.side_effect = TranslationError("Corrección", "HTTP 503")
    translator = Translator(mock_client)

    with capture_logs() as logs:
        assert translator.translate_if_needed("Corrección") == "Corrección"

    assert any(entry["log_level"] == "warning" for entry in logs)
    assert "Corrección" not in translator.cache

    mock_client.translate.side_effect = None
    mock_client.translate.return_value = TranslationResult(text="Correction")
    assert translator.translate_if_needed("Corrección") == "Correction"
