"""
Alignment Container
===================

An alignment is a set of edits keyed by edit token. During search it
partitions the source and target words of one problem among its edits.
Edits are never changed in place; the search only adds and removes whole edits.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from paraphrase_aligner.alignment.alignment_utils import check_lengths
from paraphrase_aligner.alignment.edits import Edit, EditKind, JsonEdit
from paraphrase_aligner.alignment.words import Word, WordsBag, sorted_words

if TYPE_CHECKING:
    from paraphrase_aligner.alignment.features import Feature, FeatureContext

logger = logging.getLogger(__name__)


class Alignment:
    """Insertion-ordered set of edits"""

    def __init__(self, edits: Iterable[Edit] = ()):
        self._edits: Dict[int, Edit] = {}
        self.add(*edits)

    @classmethod
    def from_word_bags(cls, source: WordsBag, target: WordsBag) -> "Alignment":
        """Starting state of a search: every source word deleted, every target word inserted"""
        alignment = cls()
        alignment.add(*(Edit.delete(w) for w in sorted_words(source.values())))
        alignment.add(*(Edit.ins(w) for w in sorted_words(target.values())))
        return alignment

    @classmethod
    def from_words(cls, source: Iterable[Word], target: Iterable[Word]) -> "Alignment":
        return cls.from_word_bags({w.id: w for w in source}, {w.id: w for w in target})

    @classmethod
    def from_edits(cls, *edits: Edit) -> "Alignment":
        return cls(edits)

    def add(self, *edits: Edit) -> None:
        for edit in edits:
            self._edits[edit.token] = edit

    def remove(self, *edits: Edit) -> None:
        """Remove edits by token; edits that are not members are ignored"""
        for edit in edits:
            self._edits.pop(edit.token, None)

    def clone(self) -> "Alignment":
        """Shallow copy: same edit objects, independent membership"""
        clone = Alignment()
        clone._edits = dict(self._edits)
        return clone

    def filter(self, kind: EditKind) -> List[Edit]:
        return [e for e in self._edits.values() if e.kind is kind]

    def includes(self, edit: Edit) -> bool:
        """Content check: True if some member is equivalent to the edit"""
        return any(member.equivalent(edit) for member in self._edits.values())

    def __contains__(self, edit: Edit) -> bool:
        return edit.token in self._edits

    def __iter__(self) -> Iterator[Edit]:
        return iter(list(self._edits.values()))

    def __len__(self) -> int:
        return len(self._edits)

    @property
    def edits(self) -> List[Edit]:
        return list(self._edits.values())

    def is_complete(self) -> bool:
        """True once no del edit remains"""
        return not self.filter(EditKind.DEL)

    def score(self, features: Sequence["Feature"], weights: Sequence[float], context: "FeatureContext") -> float:
        check_lengths(features, weights)
        return sum(edit.score(features, weights, context) for edit in self._edits.values())

    def edits_accuracy(self, gold: "Alignment") -> float:
        """
        Fraction of the gold edits that this alignment includes.

        An empty gold alignment scores 1.0 against an empty candidate and 0.0
        otherwise.
        """
        if len(gold) == 0:
            return 1.0 if len(self) == 0 else 0.0
        matched = sum(1 for edit in gold if self.includes(edit))
        return matched / len(gold)

    def to_json_edits(self) -> Tuple[Dict[str, JsonEdit], Dict[str, JsonEdit]]:
        """
        Index the edits by word id: (source word id -> edit, target word id -> edit).
        The first edit seen for an id wins.
        """
        by_source: Dict[str, JsonEdit] = {}
        by_target: Dict[str, JsonEdit] = {}
        for edit in self._edits.values():
            left, right = edit.to_json_edit().explode()
            for word_id, json_edit in left.items():
                by_source.setdefault(word_id, json_edit)
            for word_id, json_edit in right.items():
                by_target.setdefault(word_id, json_edit)
        return by_source, by_target

    def __str__(self) -> str:
        return "{ " + "".join(f"{edit} " for edit in self._edits.values()) + "}"

    def __repr__(self) -> str:
        return f"Alignment({len(self)} edits)"


def merge_alignments(a: Alignment, b: Alignment) -> Alignment:
    return Alignment.from_edits(*a, *b)


def score_accuracy(
    a: Alignment,
    b: Alignment,
    features: Sequence["Feature"],
    weights: Sequence[float],
    context: "FeatureContext",
) -> float:
    """1 - |score(a) - score(b)| / max(score(a), score(b)); 0 when the max is 0"""
    sa, sb = a.score(features, weights, context), b.score(features, weights, context)
    top = max(sa, sb)
    if top == 0.0:
        return 0.0
    return 1.0 - abs(sa - sb) / top


def phi(alignment: Alignment, features: Sequence["Feature"], context: "FeatureContext") -> np.ndarray:
    """Feature vector of an alignment: each feature summed over all edits"""
    return np.array(
        [sum(feature(edit, context) for edit in alignment) for feature in features],
        dtype=float,
    )
