from __future__ import annotations

from pathlib import Path

import pytest

from paraphrase_aligner.config.paths import default_scholie_path, default_vocabulary_path
from paraphrase_aligner.main import build_parser, default_input, main


def test_parser_defaults_and_repeated_words() -> None:
    args = build_parser().parse_args(["-w", "a.xlsx", "-w", "b.xlsx", "-ts", "gold.tmx", "--features", "EditType"])
    assert args.words == ["a.xlsx", "b.xlsx"]
    assert args.features == ["EditType"]
    assert args.results_log is None
    assert args.vocabulary is None and args.scholie is None


def test_default_data_files_follow_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    assert default_vocabulary_path() == tmp_path / "Vocabulaire_Genavensis.xlsx"
    assert default_scholie_path() == tmp_path / "scholied.json"


def test_default_input_uses_existing_default_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    assert default_input(None, default_scholie_path()) is None

    default_scholie_path().write_text("{}", encoding="utf-8")
    assert default_input(None, default_scholie_path()) == str(tmp_path / "scholied.json")
    assert default_input("other.json", default_scholie_path()) == "other.json"


def test_missing_input_exits_with_error(tmp_path: Path) -> None:
    code = main(["-w", str(tmp_path / "missing.xlsx"), "-ts", str(tmp_path / "gold.tmx"), "--log-dir", str(tmp_path)])
    assert code == 1


def test_invalid_configuration_exits_with_usage_error(tmp_path: Path) -> None:
    code = main([
        "-w", "words.xlsx", "-ts", "gold.tmx",
        "--epochs", "2", "--burn-in", "5",
        "--log-dir", str(tmp_path),
    ])
    assert code == 2
