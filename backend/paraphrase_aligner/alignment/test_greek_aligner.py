from __future__ import annotations

import pytest

from paraphrase_aligner.alignment.alignment import Alignment
from paraphrase_aligner.alignment.alignment_utils import ConfigurationError
from paraphrase_aligner.alignment.edits import Edit, EditKind
from paraphrase_aligner.alignment.greek_aligner import GreekAligner, limited_subsequences, remove_edits_with_words
from paraphrase_aligner.alignment.words import Word


def _w(word_id: str, text: str) -> Word:
    return Word(id=word_id, text=text, chant="1", verse="1")


def test_matching_texts_give_a_single_eq() -> None:
    start = Alignment.from_words([_w("HOM.1", "lupus")], [_w("PARA.1", "lupus,")])
    candidates = GreekAligner().next(start, 5)

    assert len(candidates) == 1
    (edit,) = candidates[0].edits
    assert edit.kind is EditKind.EQ
    assert str(edit) == "Eq(lupus , lupus,)"
    assert len(start) == 2


def test_sub_candidates_pair_every_del_with_the_ins() -> None:
    start = Alignment.from_words([_w("HOM.1", "a"), _w("HOM.2", "b")], [_w("PARA.1", "c")])
    candidates = GreekAligner().next(start, 1)

    assert len(candidates) == 2
    assert all(not c.filter(EditKind.EQ) for c in candidates)
    assert [str(c) for c in candidates] == ["{ Del(b) Sub(a , c) }", "{ Del(a) Sub(b , c) }"]


def test_sub_pass_replaces_every_touched_edit() -> None:
    start = Alignment.from_words([_w("HOM.1", "a"), _w("HOM.2", "b")], [_w("PARA.1", "c"), _w("PARA.2", "d")])
    candidates = GreekAligner().next(start, 2)

    assert len(candidates) == 3 * 3
    assert str(candidates[-1]) == "{ Sub(a b , c d) }"


def test_terminal_states() -> None:
    assert GreekAligner().next(Alignment.from_words([], [_w("PARA.1", "c")]), 2) == []
    assert GreekAligner().next(Alignment.from_words([_w("HOM.1", "a")], []), 2) == []


def test_subsequence_length_must_be_positive() -> None:
    with pytest.raises(ConfigurationError):
        GreekAligner().next(Alignment.from_words([_w("HOM.1", "a")], [_w("PARA.1", "b")]), 0)


@pytest.mark.parametrize(
    "limit, expected",
    [
        (1, ["a", "b", "c"]),
        (2, ["a", "b", "c", "ab", "ac", "bc"]),
        (5, ["a", "b", "c", "ab", "ac", "bc", "abc"]),
    ],
)
def test_limited_subsequences(limit: int, expected) -> None:
    words = [_w("HOM.1", "a"), _w("HOM.2", "b"), _w("HOM.3", "c")]
    assert ["".join(w.text for w in group) for group in limited_subsequences(words, limit)] == expected


def test_remove_edits_with_words_matches_by_id() -> None:
    alignment = Alignment.from_words([_w("HOM.1", "a"), _w("HOM.2", "b")], [_w("PARA.1", "c")])
    remove_edits_with_words(alignment, [Word(id="HOM.2", text="something else")])
    assert str(alignment) == "{ Del(a) Ins(c) }"
    alignment.add(Edit.sub([_w("HOM.2", "b")], [_w("PARA.2", "d")]))
    remove_edits_with_words(alignment, [_w("PARA.2", "d")])
    assert len(alignment) == 2
