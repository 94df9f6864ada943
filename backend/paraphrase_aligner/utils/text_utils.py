"""
Text Processing Utilities
========================

Normalization helpers shared by the aligner, the features and the loaders.
Greek texts carry polytonic accents and breathings as combining marks, so
every comparison that should ignore them goes through `normalize_text`.
"""

import unicodedata
from functools import lru_cache


@lru_cache(maxsize=65536)
def strip_diacritics(text: str) -> str:
    """Remove combining marks (accents, breathings, iota subscripts) and recompose"""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def normalize_text(text: str) -> str:
    """lower + strip diacritics"""
    return strip_diacritics(text).lower()


@lru_cache(maxsize=65536)
def remove_punctuation(text: str) -> str:
    """
    Drop every Unicode punctuation character.

    Covers the Greek ano teleia (·) and question mark (;) as well as the
    Latin marks found in the paraphrase transcriptions.
    """
    return "".join(ch for ch in text if not unicodedata.category(ch).startswith("P"))


def split_glosses(raw: str, separator: str = "-") -> list:
    """Split a hyphen-delimited gloss cell into trimmed glosses"""
    if not raw:
        return []
    return [part.strip() for part in str(raw).split(separator)]
