"""
Feature Library
===============

Scalar features of an edit used by the linear scoring model.

A feature is a plain function `(edit, context) -> float`. The context carries
the auxiliary data (vocabularies, scholie index) and a memo cache that lives
exactly as long as one alignment run: edits of different problems can share
content, so a cache must never outlive the problem it was filled for.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from functools import wraps
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from paraphrase_aligner.alignment.alignment_utils import ConfigurationError
from paraphrase_aligner.alignment.edits import Edit, EditKind
from paraphrase_aligner.alignment.scholie import ScholieIndex
from paraphrase_aligner.alignment.words import sum_words
from paraphrase_aligner.config import settings
from paraphrase_aligner.utils.text_utils import normalize_text

logger = logging.getLogger(__name__)

Vocabulary = Mapping[str, Sequence[str]]

# Edit type prior: strongly favors eq edits
EDIT_TYPE_SCORES = {
    EditKind.INS: 1.0,
    EditKind.DEL: 2.0,
    EditKind.EQ: 10.0,
    EditKind.SUB: 1.0,
}


@dataclass
class FeatureContext:
    """
    Auxiliary data for one alignment run plus its feature cache.

    Attributes:
        vocabulary: lemma -> glosses (VocDistance)
        equiv_terms: lemma -> equivalent terms (EqEquivTermDistance)
        scholie: prefix-searchable commentary index (ScholieDistance)
        scholie_table: exact-match commentary table (ScholieDistanceExact)
        scholie_missing_score: ScholieDistance value when no commentary is found
        scholie_ins_del_score: ScholieDistance value for ins and del edits
    """
    vocabulary: Vocabulary = field(default_factory=dict)
    equiv_terms: Vocabulary = field(default_factory=dict)
    scholie: ScholieIndex = field(default_factory=ScholieIndex)
    scholie_table: Mapping[str, Sequence[str]] = field(default_factory=dict)
    scholie_missing_score: float = settings.SCHOLIE_MISSING_SCORE
    scholie_ins_del_score: float = settings.SCHOLIE_INS_DEL_SCORE
    cache: Dict[Tuple[str, int], float] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def reset(self) -> None:
        """Drop every cached feature value"""
        with self._lock:
            self.cache.clear()

    def fresh(self) -> "FeatureContext":
        """Same auxiliary data, empty cache"""
        return replace(self, cache={}, _lock=threading.Lock())

    def cached(self, name: str, edit: Edit, compute: Callable[[], float]) -> float:
        key = (name, edit.token)
        value = self.cache.get(key)
        if value is None:
            value = compute()
            with self._lock:
                self.cache[key] = value
        return value


Feature = Callable[[Edit, FeatureContext], float]


def cached_feature(func: Feature) -> Feature:
    """Memoize a feature in the run context, keyed by (feature name, edit token)"""
    name = func.__name__

    @wraps(func)
    def wrapper(edit: Edit, context: FeatureContext) -> float:
        return context.cached(name, edit, lambda: func(edit, context))

    return wrapper


# ----- distance helpers -----

def levenshtein_distance(s: str, t: str) -> int:
    """Edit distance counted in code points"""
    return Levenshtein.distance(s, t)


def normalized_levenshtein(s: str, t: str) -> float:
    """Edit distance divided by the longer length; two empty strings are at distance 0"""
    longest = max(len(s), len(t))
    if longest == 0:
        return 0.0
    return levenshtein_distance(s, t) / longest


def has_same_meaning(a: Sequence[str], b: Sequence[str]) -> bool:
    """
    True when the two gloss lists have the same length and share at least one
    gloss, compared lower-cased and without diacritics.
    """
    if len(a) != len(b):
        return False
    normalized_b = {normalize_text(x) for x in b}
    return any(normalize_text(w) in normalized_b for w in a)


def _single_pair(edit: Edit):
    """The (source, target) word pair of an eq or one-to-one sub edit, else None"""
    if edit.kind is EditKind.EQ or (
        edit.kind is EditKind.SUB and len(edit.source) == 1 and len(edit.target) == 1
    ):
        return edit.source[0], edit.target[0]
    return None


def _distance_on_field(edit: Edit, field_name: str) -> float:
    source, target = edit.words()
    source_value = getattr(sum_words(source), field_name)
    target_value = getattr(sum_words(target), field_name)
    return 1.0 - normalized_levenshtein(source_value, target_value)


# ----- features -----

def edit_type(edit: Edit, context: FeatureContext) -> float:
    """Constant prior per edit kind"""
    return EDIT_TYPE_SCORES.get(edit.kind, 0.0)


@cached_feature
def lexical_similarity(edit: Edit, context: FeatureContext) -> float:
    """1 - normalized Levenshtein distance between the summed texts"""
    return _distance_on_field(edit, "text")


@cached_feature
def lemma_distance(edit: Edit, context: FeatureContext) -> float:
    return _distance_on_field(edit, "lemma")


@cached_feature
def tag_distance(edit: Edit, context: FeatureContext) -> float:
    return _distance_on_field(edit, "tag")


@cached_feature
def voc_distance(edit: Edit, context: FeatureContext) -> float:
    """
    1.0 when both lemmas share a gloss in the vocabulary, else 0.0.

    Only eq edits and one-to-one subs are compared; multi-word subs score 0.
    """
    pair = _single_pair(edit)
    if pair is None:
        return 0.0
    source, target = pair
    voc = context.vocabulary
    return 1.0 if has_same_meaning(voc.get(source.lemma, []), voc.get(target.lemma, [])) else 0.0


@cached_feature
def eq_equiv_term_distance(edit: Edit, context: FeatureContext) -> float:
    """1.0 when the target lemma is listed as the equivalent term of the source lemma"""
    pair = _single_pair(edit)
    if pair is None:
        return 0.0
    source, target = pair
    return 1.0 if has_same_meaning(context.equiv_terms.get(source.lemma, []), [target.lemma]) else 0.0


@cached_feature
def scholie_distance(edit: Edit, context: FeatureContext) -> float:
    """
    1 - smallest normalized distance between the target text and the
    commentary entries of every scholie key starting with the source text.

    ins/del edits score `scholie_ins_del_score` and edits without any
    commentary score `scholie_missing_score` (both 1.0 by default).
    """
    if edit.kind in (EditKind.INS, EditKind.DEL):
        return context.scholie_ins_del_score

    source, target = edit.words()
    entry = normalize_text(sum_words(source).text)
    target_text = normalize_text(sum_words(target).text)

    best: Optional[float] = None
    for candidate in context.scholie.entries_for(entry):
        dist = normalized_levenshtein(target_text, normalize_text(candidate))
        if best is None or dist < best:
            best = dist
        if dist == 0:
            break

    if best is None:
        return context.scholie_missing_score
    return 1.0 - best


def scholie_distance_exact(edit: Edit, context: FeatureContext) -> float:
    """Exact-key variant of scholie_distance; 0.0 when the source has no commentary"""
    source, target = edit.words()
    entries = context.scholie_table.get(sum_words(source).text, [])
    if not entries:
        return 0.0
    target_text = sum_words(target).text
    return 1.0 - min(normalized_levenshtein(target_text, candidate) for candidate in entries)


def max_distance(edit: Edit, context: FeatureContext) -> float:
    """OR-like combination: the largest of the distance features"""
    return max(
        lexical_similarity(edit, context),
        lemma_distance(edit, context),
        tag_distance(edit, context),
        voc_distance(edit, context),
        scholie_distance(edit, context),
        eq_equiv_term_distance(edit, context),
    )


FEATURES: Dict[str, Feature] = {
    "EditType": edit_type,
    "LexicalSimilarity": lexical_similarity,
    "LemmaDistance": lemma_distance,
    "TagDistance": tag_distance,
    "VocDistance": voc_distance,
    "EqEquivTermDistance": eq_equiv_term_distance,
    "ScholieDistance": scholie_distance,
    "ScholieDistanceExact": scholie_distance_exact,
    "MaxDistance": max_distance,
}

DEFAULT_FEATURE_NAMES = [
    "EditType",
    "LexicalSimilarity",
    "LemmaDistance",
    "TagDistance",
    "VocDistance",
    "ScholieDistance",
    "MaxDistance",
]

DEFAULT_FEATURES: List[Feature] = [FEATURES[name] for name in DEFAULT_FEATURE_NAMES]


def resolve_features(names: Sequence[str]) -> List[Feature]:
    """Map feature names to feature functions"""
    unknown = [name for name in names if name not in FEATURES]
    if unknown:
        raise ConfigurationError(f"unknown features: {unknown}; available: {sorted(FEATURES)}")
    return [FEATURES[name] for name in names]


def feature_name(feature: Feature) -> str:
    for name, candidate in FEATURES.items():
        if candidate is feature:
            return name
    return getattr(feature, "__name__", repr(feature))
