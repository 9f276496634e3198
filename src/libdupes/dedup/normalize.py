"""
String normalization for fuzzy matching passes.

An empty result means "cannot compare": callers must never treat two
empty normalized strings as a match.
"""

import re
import unicodedata
from typing import Any, Optional

# ASCII punctuation: ! through /, : through @, [ through `, { through ~
_ASCII_PUNCTUATION = re.compile(r"[!-/:-@\[-`{-~]")
_SPACES = re.compile(r" +")


def remove_diacritics(text: str) -> str:
    """Strip combining marks after compatibility decomposition."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_string(value: Any) -> str:
    """Normalize a value for comparison.

    Coerces to text, strips diacritics, replaces ASCII punctuation with
    spaces, collapses runs of spaces, trims and lower-cases.

    The trim is intentional: "War and Peace." and "War and Peace" normalize
    to the same string, and a value made only of punctuation normalizes
    to "".

    Args:
        value: Value to normalize (None is treated as empty)

    Returns:
        Normalized string, or "" when nothing comparable is left

    Example:
        >>> normalize_string("Guerre et Paix: Été 1812")
        'guerre et paix ete 1812'
    """
    if value is None:
        return ""
    text = str(value)
    if not text:
        return ""

    text = remove_diacritics(text)
    text = _ASCII_PUNCTUATION.sub(" ", text)
    text = _SPACES.sub(" ", text).strip()
    return text.lower()


def first_initial(first_name: Optional[str]) -> str:
    """Normalized first initial of a first name ("" when there is none)."""
    return normalize_string(first_name)[:1]
