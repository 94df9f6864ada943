"""
Word Model
==========

Plain records for annotated corpus words and the alignable units built from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple

if TYPE_CHECKING:
    from paraphrase_aligner.alignment.alignment import Alignment

# Corpus tags used by the loaders and the gold standard
SOURCE_TAG = "HOM"
TARGET_TAG = "PARA"


@dataclass(frozen=True)
class Word:
    """
    One annotated word of the source or target corpus.

    Attributes:
        id: Corpus-qualified identifier, e.g. "HOM.123"
        text: Normalized surface form
        lemma: Dictionary form
        tag: Morphosyntactic tag
        verse: Verse number within the chant
        chant: Chant (book) number
        source: Corpus tag ("HOM" or "PARA")
    """
    id: str = ""
    text: str = ""
    lemma: str = ""
    tag: str = ""
    verse: str = ""
    chant: str = ""
    source: str = ""

    @property
    def problem_id(self) -> str:
        return get_problem_id(self.chant, self.verse)


# Word database: ID -> Word
DB = Dict[str, Word]
WordsBag = Dict[str, Word]


def get_word_id(source: str, raw_id: str) -> str:
    """Build the corpus-qualified id of a word from its corpus tag and raw id"""
    return f"{source}.{raw_id}"


def get_problem_id(chant: str, verse: str) -> str:
    return f"{chant}.{verse}"


def word_sort_key(word_id: str) -> Tuple[str, float, str]:
    """
    Sort key ordering ids by corpus tag, then numerically on the raw id.

    "HOM.9" sorts before "HOM.10"; ids whose raw part is not numeric sort after
    the numeric ones, by their raw text.
    """
    prefix, _, rest = word_id.partition(".")
    head = rest.split(".", 1)[0]
    number = float(int(head)) if head.isascii() and head.isdigit() else float("inf")
    return prefix, number, word_id


def sorted_words(words: Iterable[Word]) -> List[Word]:
    return sorted(words, key=lambda w: word_sort_key(w.id))


def sum_words(words: Iterable[Word]) -> Word:
    """
    Collapse a group of words into one, so that multi-word groups can be
    compared as if they were single words.

    Text, lemma and tag are concatenated; identity fields come from the first word.
    """
    words = list(words)
    if not words:
        return Word()
    first = words[0]
    return Word(
        id=first.id,
        text="".join(w.text for w in words),
        lemma="".join(w.lemma for w in words),
        tag="".join(w.tag for w in words),
        verse=first.verse,
        chant=first.chant,
        source=first.source,
    )


@dataclass(frozen=True)
class Problem:
    """One alignable unit: a source word bag and a target word bag"""
    source: WordsBag = field(default_factory=dict)
    target: WordsBag = field(default_factory=dict)

    @classmethod
    def from_words(cls, source: Iterable[Word], target: Iterable[Word]) -> "Problem":
        return cls(source={w.id: w for w in source}, target={w.id: w for w in target})

    def __str__(self) -> str:
        source_text = "".join(f"{w.text} " for w in sorted_words(self.source.values()))
        target_text = "".join(f"{w.text} " for w in sorted_words(self.target.values()))
        return f"[{source_text} -> {target_text}]"


@dataclass
class GoldStandard:
    """A problem together with its human-annotated reference alignment"""
    id: str
    problem: Problem
    alignment: "Alignment"

    def __str__(self) -> str:
        return f"{self.id} {self.problem}"
