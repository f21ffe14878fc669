"""
Language helpers shared by the prompt compiler and script cleaning.

Reading speeds drive every word-count target handed to the model.
"""

from typing import Dict

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "ar": "Arabic",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "tr": "Turkish",
    "ru": "Russian",
    "hi": "Hindi",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
}

# Spoken words per second
ARABIC_WORDS_PER_SECOND = 2.0
DEFAULT_WORDS_PER_SECOND = 2.5

# Share of Arabic letters above which free text counts as Arabic
ARABIC_TEXT_RATIO = 0.2


def get_language_name(code: str) -> str:
    """Get language name from code, returns code if not found."""
    return LANGUAGE_NAMES.get(code.lower(), code.upper())


def normalize_language(language: str) -> str:
    """Map a code or a display name ("Arabic") to a lowercase code."""
    value = (language or "en").strip()
    lowered = value.lower()
    if lowered in LANGUAGE_NAMES:
        return lowered
    for code, name in LANGUAGE_NAMES.items():
        if name.lower() == lowered:
            return code
    return lowered


def is_arabic(language: str) -> bool:
    return normalize_language(language) == "ar"


def words_per_second(language: str) -> float:
    """Reading speed used for narration word targets."""
    return ARABIC_WORDS_PER_SECOND if is_arabic(language) else DEFAULT_WORDS_PER_SECOND


def is_arabic_text(text: str) -> bool:
    """Detect Arabic script by the share of letters in U+0600..U+06FF."""
    letters = [ch for ch in text if ch.isalpha()]
    if not letters:
        return False
    arabic = sum(1 for ch in letters if 0x0600 <= ord(ch) <= 0x06FF)
    return arabic / len(letters) >= ARABIC_TEXT_RATIO


def count_words(text: str) -> int:
    return len(text.split())
