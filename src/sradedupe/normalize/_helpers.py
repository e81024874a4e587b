"""Compiled regex patterns and text helpers shared by the extractors."""

import re
import unicodedata

# Default patterns; DedupeConfig can override all of these except TITLE_YEAR_RE
DOI_RE = re.compile(r"10[.][0-9]{4,}(?:[.][0-9]+)*/(?:(?![%\"#? ])\S)+")
JUNK_WORDS_RE = re.compile(r"\b(the|a)\b")
LOOKS_NUMERIC_RE = re.compile(r"^[0-9.\-]+$")
LOOKS_NUMERIC_WHITESPACE_RE = re.compile(r"^\s*[0-9.\-]+\s*$")
ONLY_NUMERIC_RE = re.compile(r"[^0-9]+")

TITLE_YEAR_RE = re.compile(r"\b([0-9]{4})\b")

SUFFIX_RE = re.compile(r"\s+(Jr\.?|Sr\.?|II|III|IV|V)$", re.IGNORECASE)
INITIALS_RE = re.compile(r"^[A-Z]\.?(\s*[A-Z]\.?)*$")
NAME_PUNCT_RE = re.compile(r"[.\-'’]+")


def strip_accents(text: str) -> str:
    """Remove diacritical marks for cross-locale matching.

    Parameters
    ----------
    text : str
        Input text with potential diacritics.

    Returns
    -------
    str
        Text with diacritical marks removed.
    """
    nfd = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in nfd if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def title_years(title: str) -> list[str]:
    """Return every word-bounded 4-digit token in *title*, in order."""
    return TITLE_YEAR_RE.findall(title)
