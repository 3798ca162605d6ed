"""
Module: core.utils.bilingual

Purpose:
    Split question text into a primary-language (Latin script) string and a
    secondary-language (Arabic script, e.g. Urdu) string. Handles records
    where both languages were concatenated into the primary field.

Key Functions:
    - normalize_bilingual(): Derive a BilingualText pair from raw fields
    - has_secondary_script(): Unicode block membership test

Rules:
    1. Secondary field holds secondary script -> both fields verbatim
    2. Primary field holds secondary script -> split before the first long
       run of secondary-script characters; if no clean split exists the
       whole field becomes secondary and primary is empty
    3. Otherwise the field is pure primary-language text

    normalize_bilingual(*normalize_bilingual(p, s)) == normalize_bilingual(p, s)

Dependencies:
    - re (std)

Used By:
    - core.models.questions: Question.bilingual
    - composer.document: Render-time text
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional


# Arabic, Arabic Supplement, Arabic Extended-A, Presentation Forms A and B
SECONDARY_SCRIPT_RANGES = (
    "\u0600-\u06FF"
    "\u0750-\u077F"
    "\u08A0-\u08FF"
    "\uFB50-\uFDFF"
    "\uFE70-\uFEFF"
)

# Consecutive secondary-script characters that mark the start of the
# secondary span. Single characters (a stray symbol) do not split.
MIN_SECONDARY_RUN = 2

_SECONDARY_CHAR = re.compile(f"[{SECONDARY_SCRIPT_RANGES}]")
_SECONDARY_RUN = re.compile(f"[{SECONDARY_SCRIPT_RANGES}]{{{MIN_SECONDARY_RUN},}}")
_PRIMARY_LETTER = re.compile(r"[A-Za-z\u00C0-\u024F]")


@dataclass(frozen=True)
class BilingualText:
    """
    Primary/secondary text pair (either may be empty).

    Iterating yields (primary, secondary) so a pair can be fed straight
    back into normalize_bilingual().
    """

    primary: str
    secondary: str

    def __iter__(self) -> Iterator[str]:
        yield self.primary
        yield self.secondary

    @property
    def has_primary(self) -> bool:
        return bool(self.primary)

    @property
    def has_secondary(self) -> bool:
        return bool(self.secondary)

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.secondary


def has_secondary_script(text: Optional[str]) -> bool:
    """True if text contains any secondary-script character."""
    if not text:
        return False
    return _SECONDARY_CHAR.search(text) is not None


def _split_concatenated(raw: str) -> Optional[tuple[str, str]]:
    """
    Split "English (اردو)" / "English\\nاردو" into its two spans.

    Returns None when there is no clean split point.
    """
    match = _SECONDARY_RUN.search(raw)
    if match is None:
        return None

    head = raw[: match.start()].rstrip()
    bracketed = head.endswith("(")
    if bracketed:
        head = head[:-1].rstrip()

    primary = head.strip()
    secondary = raw[match.start():].strip()
    if bracketed and secondary.endswith(")"):
        secondary = secondary[:-1].rstrip()

    if not _PRIMARY_LETTER.search(primary) or not secondary:
        return None
    return primary, secondary


def normalize_bilingual(
    primary: Optional[str],
    secondary: Optional[str] = None,
) -> BilingualText:
    """
    Derive the primary/secondary pair for a question field.

    Pure and idempotent: feeding the result back in reproduces it.

    Args:
        primary: Raw primary field (may contain both languages)
        secondary: Raw secondary field (optional)

    Returns:
        BilingualText with stripped strings

    Example:
        >>> normalize_bilingual("What is a cell? (خلیہ کیا ہے؟)")
        BilingualText(primary='What is a cell?', secondary='خلیہ کیا ہے؟')
    """
    raw = primary or ""
    raw_secondary = (secondary or "").strip()

    if raw_secondary and has_secondary_script(raw_secondary):
        return BilingualText(primary=raw.strip(), secondary=raw_secondary)

    if has_secondary_script(raw):
        split = _split_concatenated(raw)
        if split is not None:
            return BilingualText(primary=split[0], secondary=split[1])
        return BilingualText(primary="", secondary=raw.strip())

    return BilingualText(primary=raw.strip(), secondary="")
