"""
Edit Model
==========

The four edit variants (ins, del, eq, sub) as one closed tagged union.

Every edit carries copies of its words and a surrogate `token` assigned at
construction time. Equality and hashing go through the token only, so two
edits with the same content are still distinct members of an alignment;
content comparison is `Edit.equivalent`.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence, Tuple

from paraphrase_aligner.alignment.alignment_utils import InvariantViolation, check_lengths
from paraphrase_aligner.alignment.words import Word

if TYPE_CHECKING:
    from paraphrase_aligner.alignment.features import Feature, FeatureContext

_tokens = itertools.count(1)


class EditKind(str, Enum):
    INS = "ins"
    DEL = "del"
    EQ = "eq"
    SUB = "sub"


@dataclass(frozen=True)
class Edit:
    """
    One atomic correspondence between source words and target words.

    - INS: no source word, one target word
    - DEL: one source word, no target word
    - EQ:  one source word deemed equivalent to one target word
    - SUB: a group of source words mapped to a group of target words
    """
    kind: EditKind = field(compare=False)
    source: Tuple[Word, ...] = field(default=(), compare=False)
    target: Tuple[Word, ...] = field(default=(), compare=False)
    token: int = field(default_factory=lambda: next(_tokens), repr=False)

    @classmethod
    def ins(cls, word: Word) -> "Edit":
        return cls(EditKind.INS, (), (word,))

    @classmethod
    def delete(cls, word: Word) -> "Edit":
        return cls(EditKind.DEL, (word,), ())

    @classmethod
    def eq(cls, source: Word, target: Word) -> "Edit":
        return cls(EditKind.EQ, (source,), (target,))

    @classmethod
    def sub(cls, source: Iterable[Word], target: Iterable[Word]) -> "Edit":
        source, target = tuple(source), tuple(target)
        if not source and not target:
            raise InvariantViolation("sub edit built with no words on either side")
        return cls(EditKind.SUB, source, target)

    @property
    def word(self) -> Word:
        """The single word of an ins or del edit"""
        if self.kind is EditKind.INS:
            return self.target[0]
        if self.kind is EditKind.DEL:
            return self.source[0]
        raise InvariantViolation(f"{self.kind.value} edit has no single word")

    def words(self) -> Tuple[Tuple[Word, ...], Tuple[Word, ...]]:
        """The (source, target) word groups; one side is empty for ins/del"""
        return self.source, self.target

    def word_ids(self) -> Tuple[frozenset, frozenset]:
        return frozenset(w.id for w in self.source), frozenset(w.id for w in self.target)

    def touches(self, word: Word) -> bool:
        """True when the edit uses the word on either side (matched by id)"""
        return any(w.id == word.id for w in self.source) or any(w.id == word.id for w in self.target)

    @property
    def problem_id(self) -> str:
        """Chant.verse locator of the first constituent word"""
        if self.source:
            return self.source[0].problem_id
        if self.target:
            return self.target[0].problem_id
        raise InvariantViolation(f"cannot get the problem of an empty {self.kind.value} edit")

    def score(self, features: Sequence["Feature"], weights: Sequence[float], context: "FeatureContext") -> float:
        """Linear combination of the feature values of this edit"""
        check_lengths(features, weights)
        return sum(w * f(self, context) for f, w in zip(features, weights))

    def equivalent(self, other: "Edit") -> bool:
        """
        Content equality used by accuracy scoring.

        ins/del/eq compare the text of their words; sub compares the sets of
        word ids on each side, regardless of order.
        """
        if self.kind is not other.kind:
            return False
        if self.kind is EditKind.SUB:
            return self.word_ids() == other.word_ids()
        return (
            [w.text for w in self.source] == [w.text for w in other.source]
            and [w.text for w in self.target] == [w.text for w in other.target]
        )

    def to_json_edit(self) -> "JsonEdit":
        return JsonEdit(
            type=self.kind.value,
            source=[w.id for w in self.source],
            target=[w.id for w in self.target],
        )

    def __str__(self) -> str:
        if self.kind is EditKind.INS:
            return f"Ins({self.target[0].text})"
        if self.kind is EditKind.DEL:
            return f"Del({self.source[0].text})"
        if self.kind is EditKind.EQ:
            return f"Eq({self.source[0].text} , {self.target[0].text})"
        source = "".join(f"{w.text} " for w in self.source)
        target = "".join(f" {w.text}" for w in self.target)
        return f"Sub({source},{target})"


@dataclass
class JsonEdit:
    """Serializable form of an edit: word ids only"""
    type: str
    source: List[str] = field(default_factory=list)
    target: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"type": self.type}
        if self.source:
            payload["source"] = list(self.source)
        if self.target:
            payload["target"] = list(self.target)
        return payload

    def explode(self) -> Tuple[Dict[str, "JsonEdit"], Dict[str, "JsonEdit"]]:
        """
        Address the edit by each of the word ids it contains.

        Returns (by_source_id, by_target_id). Each entry lists the other ids of
        the same side as `source` and the ids of the opposite side as `target`.
        """
        by_source = {
            word_id: JsonEdit(self.type, _remove_at(i, self.source), list(self.target))
            for i, word_id in enumerate(self.source)
        }
        by_target = {
            word_id: JsonEdit(self.type, _remove_at(i, self.target), list(self.source))
            for i, word_id in enumerate(self.target)
        }
        return by_source, by_target


def _remove_at(i: int, items: List[str]) -> List[str]:
    return items[:i] + items[i + 1:]
