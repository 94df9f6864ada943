from __future__ import annotations

import pytest

from paraphrase_aligner.alignment.alignment_utils import ConfigurationError, InvariantViolation
from paraphrase_aligner.alignment.edits import Edit, EditKind, JsonEdit
from paraphrase_aligner.alignment.features import FeatureContext, edit_type
from paraphrase_aligner.alignment.words import Word


def _w(word_id: str, text: str) -> Word:
    return Word(id=word_id, text=text, chant="1", verse="7")


def test_edits_with_same_content_are_distinct_members() -> None:
    a, b = _w("HOM.1", "rex"), _w("PARA.1", "rex")
    first, second = Edit.eq(a, b), Edit.eq(a, b)

    assert first != second
    assert len({first, second}) == 2
    assert first.equivalent(second)


def test_sub_without_words_is_an_invariant_violation() -> None:
    with pytest.raises(InvariantViolation):
        Edit.sub([], [])


@pytest.mark.parametrize(
    "edit, expected",
    [
        (Edit.ins(_w("PARA.1", "a")), "Ins(a)"),
        (Edit.delete(_w("HOM.1", "a")), "Del(a)"),
        (Edit.eq(_w("HOM.1", "a"), _w("PARA.1", "b")), "Eq(a , b)"),
        (Edit.sub([_w("HOM.1", "a"), _w("HOM.2", "c")], [_w("PARA.1", "b"), _w("PARA.2", "d")]), "Sub(a c , b d)"),
    ],
)
def test_edit_display(edit: Edit, expected: str) -> None:
    assert str(edit) == expected


def test_problem_id_comes_from_first_word() -> None:
    assert Edit.ins(_w("PARA.3", "x")).problem_id == "1.7"
    assert Edit.sub([_w("HOM.1", "a")], []).problem_id == "1.7"


def test_single_word_accessor_rejects_pairs() -> None:
    assert Edit.delete(_w("HOM.1", "a")).word.id == "HOM.1"
    with pytest.raises(InvariantViolation):
        _ = Edit.eq(_w("HOM.1", "a"), _w("PARA.1", "a")).word


def test_sub_equivalence_ignores_word_order() -> None:
    a, c, b = _w("HOM.1", "a"), _w("HOM.2", "c"), _w("PARA.1", "b")
    assert Edit.sub([a, c], [b]).equivalent(Edit.sub([c, a], [b]))
    assert not Edit.sub([a], [b]).equivalent(Edit.sub([a, c], [b]))
    assert not Edit.sub([a], [b]).equivalent(Edit.eq(a, b))


def test_score_requires_one_weight_per_feature() -> None:
    edit = Edit.eq(_w("HOM.1", "a"), _w("PARA.1", "a"))
    assert edit.score([edit_type], [0.5], FeatureContext()) == 5.0
    with pytest.raises(ConfigurationError):
        edit.score([edit_type], [1.0, 2.0], FeatureContext())


def test_json_edit_explode_by_word_id() -> None:
    edit = Edit.sub([_w("HOM.1", "a"), _w("HOM.2", "c")], [_w("PARA.1", "b")])
    json_edit = edit.to_json_edit()
    assert json_edit == JsonEdit("sub", ["HOM.1", "HOM.2"], ["PARA.1"])

    by_source, by_target = json_edit.explode()
    assert by_source["HOM.1"] == JsonEdit("sub", ["HOM.2"], ["PARA.1"])
    assert by_target["PARA.1"] == JsonEdit("sub", [], ["HOM.1", "HOM.2"])
    assert by_target["PARA.1"].to_dict() == {"type": "sub", "target": ["HOM.1", "HOM.2"]}


def test_edit_kind_values() -> None:
    assert [k.value for k in EditKind] == ["ins", "del", "eq", "sub"]
