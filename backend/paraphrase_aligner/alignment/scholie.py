"""
Scholie Index
=============

Commentary (scholie) entries keyed by the normalized source word or phrase they
gloss. Keys are kept sorted so that every key starting with a given prefix can
be found with two bisections.
"""

from __future__ import annotations

import bisect
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from paraphrase_aligner.utils.text_utils import normalize_text

logger = logging.getLogger(__name__)


class ScholieIndex:
    """Prefix-searchable commentary lookup"""

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None):
        self._entries: Dict[str, List[str]] = {}
        self._keys: List[str] = []
        self._prefix_cache: Dict[str, Tuple[str, ...]] = {}
        for key, values in (entries or {}).items():
            self.add(key, values)

    def add(self, key: str, values: Iterable[str]) -> None:
        """Register the entries of a key; keys that normalize alike share one entry list"""
        normalized = normalize_text(key)
        if normalized not in self._entries:
            bisect.insort(self._keys, normalized)
        self._entries.setdefault(normalized, []).extend(values)
        self._prefix_cache.clear()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: str) -> bool:
        return normalize_text(key) in self._entries

    def find(self, key: str) -> List[str]:
        """Entries stored under exactly this key (empty when unknown)"""
        return list(self._entries.get(normalize_text(key), []))

    def prefix_search(self, prefix: str) -> List[str]:
        """All keys starting with the prefix, in sorted order"""
        prefix = normalize_text(prefix)
        start = bisect.bisect_left(self._keys, prefix)
        end = start
        while end < len(self._keys) and self._keys[end].startswith(prefix):
            end += 1
        return self._keys[start:end]

    def entries_for(self, prefix: str) -> Tuple[str, ...]:
        """
        Every entry of every key that starts with the prefix.

        An empty prefix matches nothing. Results are memoized until the next `add`.
        """
        prefix = normalize_text(prefix)
        if not prefix:
            return ()
        cached = self._prefix_cache.get(prefix)
        if cached is not None:
            return cached
        found: List[str] = []
        for key in self.prefix_search(prefix):
            found.extend(self._entries[key])
        result = tuple(found)
        self._prefix_cache[prefix] = result
        return result

    @classmethod
    def from_verses(cls, data: Mapping[str, Mapping[str, Iterable[str]]]) -> "ScholieIndex":
        """Build from the scholie JSON layout: {verse: {key: [entries]}}"""
        index = cls()
        for verse_entries in data.values():
            for key, values in verse_entries.items():
                index.add(key, values)
        logger.info(f"📚 SCHOLIE INDEX ► {len(index)} keys from {len(data)} verses")
        return index
