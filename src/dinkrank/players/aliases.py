"""
Player name normalization utilities.

Names typed by users rarely match the rankings page exactly:
- Case: "FRANCISCO CASTILLO" vs "Francisco Castillo"
- Accents: "José Núñez" vs "Jose Nunez"
- Punctuation: "O'Brien" vs "O Brien", "Mary-Jane" vs "Mary Jane"
- Initials: "J. Smith" vs "Smith"

This module reduces a name to a comparable token string. Two names refer
to the same identity when their normalized forms are equal.
"""

import re
import unicodedata
from typing import Optional

# Characters treated as word separators rather than part of a name
_PUNCTUATION_RE = re.compile(r"[.,'’\-]")

# Separators accepted between names in a pasted name list
_NAME_LIST_SPLIT_RE = re.compile(r"[,|\n]")


def strip_diacritics(text: str) -> str:
    """
    Remove accents and other combining marks.

    NFKD decomposes characters (é → e + combining acute), then the
    combining characters are dropped.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize_name(name: Optional[str]) -> str:
    """
    Normalize a player name for identity comparison.

    Normalization steps:
    1. Remove accents (é → e, ñ → n)
    2. Convert to lowercase
    3. Replace . , ' ’ - with spaces
    4. Collapse whitespace
    5. Drop tokens of a single character (initials, stray punctuation)

    Args:
        name: Raw player name from the rankings page or user input

    Returns:
        Space-joined normalized tokens, or "" for empty input

    Examples:
        >>> normalize_name("José Núñez")
        'jose nunez'
        >>> normalize_name("J. Smith")
        'smith'
        >>> normalize_name("Mary-Jane O'Brien")
        'mary jane brien'
    """
    if not name:
        return ""

    normalized = strip_diacritics(name).lower()
    normalized = _PUNCTUATION_RE.sub(" ", normalized)

    # split() with no argument collapses runs of whitespace and trims
    tokens = [token for token in normalized.split() if len(token) > 1]
    return " ".join(tokens)


def extract_last_name(name: Optional[str]) -> str:
    """
    Extract the final token of a normalized name.

    Used to group ranked players by surname:
    - "Francisco Castillo" → "castillo"
    - "Anna-Lena Friedsam" → "friedsam"
    - "J. Smith" → "smith"

    Args:
        name: Player name (normalized or not)

    Returns:
        Last normalized token, or "" when nothing survives normalization
    """
    parts = normalize_name(name).split()
    if not parts:
        return ""
    return parts[-1]


def parse_name_list(text: Optional[str]) -> list[str]:
    """
    Split a pasted block of names into individual names.

    Names may be separated by commas, pipes or newlines. Surrounding
    whitespace is trimmed and empty entries are dropped.

    Examples:
        >>> parse_name_list("Big Show, Francisco Castillo")
        ['Big Show', 'Francisco Castillo']
        >>> parse_name_list("a|b\\n\\n c ")
        ['a', 'b', 'c']
    """
    if not text:
        return []
    parts = (part.strip() for part in _NAME_LIST_SPLIT_RE.split(text))
    return [part for part in parts if part]
