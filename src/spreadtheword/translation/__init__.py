"""Translation of non-English commit subjects and tracker titles."""

from spreadtheword.translation.translator import (
    GoogleTranslateClient,
    TranslationResult,
    Translator,
    needs_translation,
)

__all__ = ["GoogleTranslateClient", "TranslationResult", "Translator", "needs_translation"]
