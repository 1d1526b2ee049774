"""Text normalization utilities.

Catalog names and model-generated names are compared after folding case,
stripping accents and collapsing whitespace, so "Sentadilla  Búlgara" and
"sentadilla bulgara" resolve to the same key.
"""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def strip_accents(value: str) -> str:
    """Remove combining diacritical marks (NFD decomposition)."""
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_name(value: str | None) -> str:
    """Lowercase, strip accents and collapse whitespace.

    Args:
        value: Raw display name (None is treated as empty)

    Returns:
        Normalized name key
    """
    if not value:
        return ""
    folded = strip_accents(value.strip().lower())
    return _WHITESPACE_RE.sub(" ", folded).strip()


def normalize_title(value: str | None) -> str:
    """Normalize a recipe/meal title for lookup.

    Same as normalize_name, but punctuation is replaced by spaces first so
    "Pollo, arroz" and "pollo arroz" match.
    """
    folded = normalize_name(value)
    return _WHITESPACE_RE.sub(" ", _NON_ALNUM_RE.sub(" ", folded)).strip()
