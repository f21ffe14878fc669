"""
Script text cleaning

Models sometimes decorate a spoken script with beat labels, list markers,
stage directions or markdown. None of that may reach the narrator.
"""

import re
from typing import Iterable

from .config import GENERIC_STAGE_LABELS

_BULLET = re.compile(r"^[\-\*\+•]\s+", re.MULTILINE)
_NUMBERED = re.compile(r"^\d+[\.\)]\s+", re.MULTILINE)
_BRACKETED = re.compile(r"\[[^\]\n]*\]")
_HEADER = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_BLANK_RUNS = re.compile(r"\n{3,}")
_SPACE_RUNS = re.compile(r"[ \t]{2,}")


def _label_pattern(labels: Iterable[str]) -> re.Pattern:
    alternatives = "|".join(
        re.escape(label).replace(r"\ ", r"\s+") for label in sorted(set(labels), key=len, reverse=True)
    )
    # "Hook:", "Scene 2:", "**Problem**:" at the start of a line
    return re.compile(
        rf"^\**\s*(?:{alternatives})(?:\s*\d+)?\s*\**\s*:\s*\**\s*",
        re.IGNORECASE | re.MULTILINE,
    )


def clean_story_text(text: str, extra_labels: Iterable[str] = ()) -> str:
    """
    Strip formatting a narrator must not read aloud.

    Removes leading beat labels (generic ones plus extra_labels, typically the
    template's stage names), bullets, numbering, bracketed directions and
    markdown headers; trims every line and collapses runs of blank lines.

    Returns:
        The cleaned text, possibly empty
    """
    if not text:
        return ""

    cleaned = text.strip().replace("\r\n", "\n")
    labels = tuple(GENERIC_STAGE_LABELS) + tuple(label.lower() for label in extra_labels)

    cleaned = _HEADER.sub("", cleaned)
    cleaned = _label_pattern(labels).sub("", cleaned)
    cleaned = _BULLET.sub("", cleaned)
    cleaned = _NUMBERED.sub("", cleaned)
    cleaned = _BRACKETED.sub("", cleaned)
    cleaned = _BOLD.sub(r"\1", cleaned)

    cleaned = _SPACE_RUNS.sub(" ", cleaned)
    cleaned = "\n".join(line.strip() for line in cleaned.split("\n"))
    cleaned = _BLANK_RUNS.sub("\n\n", cleaned)
    return cleaned.strip()
