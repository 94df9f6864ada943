from __future__ import annotations

from paraphrase_aligner.alignment.scholie import ScholieIndex


def _index() -> ScholieIndex:
    return ScholieIndex.from_verses({
        "1.1": {"μῆνιν": ["ὀργήν"], "ἄειδε": ["ᾆδε"]},
        "1.2": {"μῆνις": ["χόλος"]},
    })


def test_keys_are_normalized() -> None:
    index = _index()
    assert len(index) == 3
    assert "ΜΗΝΙΝ" in index
    assert index.find("μηνιν") == ["ὀργήν"]
    assert index.find("θεά") == []


def test_prefix_search_is_sorted() -> None:
    assert _index().prefix_search("μῆν") == ["μηνιν", "μηνις"]
    assert _index().prefix_search("ξ") == []


def test_entries_for_collects_every_matching_key() -> None:
    index = _index()
    assert index.entries_for("μην") == ("ὀργήν", "χόλος")
    assert index.entries_for("μηνιν") == ("ὀργήν",)
    assert index.entries_for("") == ()


def test_add_appends_and_invalidates_memo() -> None:
    index = _index()
    assert index.entries_for("αει") == ("ᾆδε",)
    index.add("ἄειδε", ["λέγε"])
    assert index.entries_for("αει") == ("ᾆδε", "λέγε")
    assert len(index) == 3


def test_colliding_keys_across_verses_keep_every_entry() -> None:
    index = ScholieIndex.from_verses({"1.1": {"μῆνιν": ["ὀργήν"]}, "1.2": {"Μῆνιν": ["χόλον"]}})
    assert len(index) == 1
    assert index.entries_for("μηνιν") == ("ὀργήν", "χόλον")
    assert index.find("μῆνιν") == ["ὀργήν", "χόλον"]
