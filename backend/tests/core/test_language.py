"""
Tests for storygen.core.language
"""

import pytest

from storygen.core.language import (
    count_words,
    get_language_name,
    is_arabic_text,
    normalize_language,
    words_per_second,
)


class TestLanguageNames:

    def test_known_code(self):
        assert get_language_name("en") == "English"
        assert get_language_name("AR") == "Arabic"

    def test_unknown_code_is_uppercased(self):
        assert get_language_name("xx") == "XX"

    @pytest.mark.parametrize("value, expected", [
        ("en", "en"),
        (" FR ", "fr"),
        ("Arabic", "ar"),
        ("", "en"),
        ("xx", "xx"),
    ])
    def test_normalize(self, value, expected):
        assert normalize_language(value) == expected


class TestReadingSpeed:

    def test_arabic_is_slower(self):
        assert words_per_second("ar") == 2.0
        assert words_per_second("Arabic") == 2.0

    def test_default_speed(self):
        assert words_per_second("en") == 2.5
        assert words_per_second("de") == 2.5


class TestTextHelpers:

    def test_count_words(self):
        assert count_words("  one two\nthree  ") == 3
        assert count_words("") == 0

    def test_arabic_text_detection(self):
        assert is_arabic_text("مرحبا بكم")
        assert not is_arabic_text("hello world")
        assert not is_arabic_text("123 !!")
