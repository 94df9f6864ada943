from __future__ import annotations

import pytest

from paraphrase_aligner.alignment.alignment_utils import ConfigurationError
from paraphrase_aligner.alignment.edits import Edit
from paraphrase_aligner.alignment.features import (
    FEATURES,
    FeatureContext,
    eq_equiv_term_distance,
    edit_type,
    feature_name,
    has_same_meaning,
    lemma_distance,
    lexical_similarity,
    max_distance,
    normalized_levenshtein,
    resolve_features,
    scholie_distance,
    scholie_distance_exact,
    voc_distance,
)
from paraphrase_aligner.alignment.scholie import ScholieIndex
from paraphrase_aligner.alignment.words import Word


def _src(text: str = "", lemma: str = "", n: int = 1) -> Word:
    return Word(id=f"HOM.{n}", text=text, lemma=lemma, chant="1", verse="1", source="HOM")


def _tgt(text: str = "", lemma: str = "", n: int = 1) -> Word:
    return Word(id=f"PARA.{n}", text=text, lemma=lemma, chant="1", verse="1", source="PARA")


@pytest.mark.parametrize(
    "source, target, expected",
    [
        ("rex", "rex", 1.0),
        ("a", "aa", 0.5),
        ("abc", "", 0.0),
        ("", "", 1.0),
        ("μῆνιν", "μῆνις", 0.8),
    ],
)
def test_lexical_similarity(source: str, target: str, expected: float) -> None:
    edit = Edit.eq(_src(source), _tgt(target))
    assert lexical_similarity(edit, FeatureContext()) == pytest.approx(expected)


def test_levenshtein_counts_code_points() -> None:
    assert normalized_levenshtein("μῆνιν", "μηνιν") == pytest.approx(1 / 5)


def test_ins_and_del_compare_against_nothing() -> None:
    context = FeatureContext()
    assert lexical_similarity(Edit.ins(_tgt("lupus")), context) == 0.0
    assert lemma_distance(Edit.delete(_src("lupus", "lupus")), context) == 0.0


@pytest.mark.parametrize(
    "edit, expected",
    [
        (Edit.ins(_tgt("a")), 1.0),
        (Edit.delete(_src("a")), 2.0),
        (Edit.eq(_src("a"), _tgt("a")), 10.0),
        (Edit.sub([_src("a")], [_tgt("b")]), 1.0),
    ],
)
def test_edit_type_prior(edit: Edit, expected: float) -> None:
    assert edit_type(edit, FeatureContext()) == expected


def test_voc_distance_shared_gloss() -> None:
    context = FeatureContext(vocabulary={"a": ["x", "y"]})
    assert voc_distance(Edit.eq(_src(lemma="a"), _tgt(lemma="a")), context) == 1.0


def test_voc_distance_gloss_count_mismatch() -> None:
    context = FeatureContext(vocabulary={"a": ["x", "y"], "b": ["x"]})
    assert voc_distance(Edit.eq(_src(lemma="a"), _tgt(lemma="b")), context) == 0.0


def test_voc_distance_ignores_multi_word_subs() -> None:
    context = FeatureContext(vocabulary={"a": ["x"]})
    edit = Edit.sub([_src(lemma="a", n=1), _src(lemma="a", n=2)], [_tgt(lemma="a")])
    assert voc_distance(edit, context) == 0.0
    assert voc_distance(Edit.sub([_src(lemma="a")], [_tgt(lemma="a")]), context) == 1.0


def test_has_same_meaning_ignores_case_and_accents() -> None:
    assert has_same_meaning(["Ἄνθρωπος"], ["ανθρωπος"])
    assert not has_same_meaning(["x"], ["y"])
    assert not has_same_meaning([], ["x"])


def test_eq_equiv_term_distance() -> None:
    context = FeatureContext(equiv_terms={"ἕννυμι": ["ἐνδύω"]})
    assert eq_equiv_term_distance(Edit.eq(_src(lemma="ἕννυμι"), _tgt(lemma="ἐνδύω")), context) == 1.0
    assert eq_equiv_term_distance(Edit.eq(_src(lemma="ἕννυμι"), _tgt(lemma="λέγω")), context) == 0.0


@pytest.fixture
def scholie_context() -> FeatureContext:
    return FeatureContext(scholie=ScholieIndex({"μῆνιν": ["ὀργήν", "χόλον"], "θεά": ["Μοῦσα"]}))


def test_scholie_distance_ins_del_default(scholie_context: FeatureContext) -> None:
    assert scholie_distance(Edit.ins(_tgt("anything")), scholie_context) == 1.0
    assert scholie_distance(Edit.delete(_src("μῆνιν")), scholie_context) == 1.0


def test_scholie_distance_exact_entry(scholie_context: FeatureContext) -> None:
    assert scholie_distance(Edit.sub([_src("μῆνιν")], [_tgt("ὀργήν")]), scholie_context) == 1.0
    assert scholie_distance(Edit.eq(_src("θεά"), _tgt("μουσα")), scholie_context) == 1.0


def test_scholie_distance_closest_entry(scholie_context: FeatureContext) -> None:
    edit = Edit.sub([_src("μῆνιν")], [_tgt("χολος")])
    assert scholie_distance(edit, scholie_context) == pytest.approx(1 - 1 / 5)


def test_scholie_distance_without_commentary_defaults_to_one(scholie_context: FeatureContext) -> None:
    assert scholie_distance(Edit.sub([_src("ἄειδε")], [_tgt("ᾆδε")]), scholie_context) == 1.0


def test_scholie_distance_defaults_are_configurable() -> None:
    context = FeatureContext(scholie_missing_score=0.0, scholie_ins_del_score=0.25)
    assert scholie_distance(Edit.sub([_src("ἄειδε")], [_tgt("ᾆδε")]), context) == 0.0
    assert scholie_distance(Edit.ins(_tgt("ᾆδε")), context) == 0.25


def test_scholie_distance_exact() -> None:
    context = FeatureContext(scholie_table={"μῆνιν": ["ὀργήν"]})
    assert scholie_distance_exact(Edit.eq(_src("μῆνιν"), _tgt("ὀργήν")), context) == 1.0
    assert scholie_distance_exact(Edit.eq(_src("μῆνι"), _tgt("ὀργήν")), context) == 0.0


def test_max_distance_takes_the_best_evidence() -> None:
    context = FeatureContext(vocabulary={"a": ["x"], "b": ["x"]}, scholie_missing_score=0.0)
    assert max_distance(Edit.eq(_src("foo", "a"), _tgt("bar", "b")), context) == 1.0


def test_cache_lives_with_the_context() -> None:
    context = FeatureContext(vocabulary={"a": ["x"]})
    edit = Edit.eq(_src("rex"), _tgt("rex"))
    lexical_similarity(edit, context)
    assert ("lexical_similarity", edit.token) in context.cache

    fresh = context.fresh()
    assert fresh.cache == {}
    assert fresh.vocabulary is context.vocabulary
    assert context.cache

    context.reset()
    assert context.cache == {}


def test_resolve_features() -> None:
    assert resolve_features(["EditType", "LexicalSimilarity"]) == [edit_type, lexical_similarity]
    with pytest.raises(ConfigurationError):
        resolve_features(["EditType", "Nope"])


def test_feature_names_round_trip() -> None:
    for name, feature in FEATURES.items():
        assert feature_name(feature) == name


def test_scholie_distance_sees_commentary_from_every_verse() -> None:
    context = FeatureContext(scholie=ScholieIndex.from_verses({"1.1": {"μῆνιν": ["ὀργήν"]}, "1.2": {"Μῆνιν": ["χόλον"]}}))
    assert scholie_distance(Edit.sub([_src("μῆνιν")], [_tgt("ὀργήν")]), context) == 1.0
    assert scholie_distance(Edit.sub([_src("μῆνιν")], [_tgt("χόλον")]), context) == 1.0
