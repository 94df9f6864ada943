"""
Corpus Loaders
==============

Read the words database, the vocabularies and the scholie from their source
files. Loaders fail closed: a missing or malformed file raises DataLoadError
and nothing partial is handed to the aligner.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Union

import pandas as pd

from paraphrase_aligner.alignment.alignment_utils import DataLoadError
from paraphrase_aligner.alignment.scholie import ScholieIndex
from paraphrase_aligner.alignment.words import DB, Word, get_word_id
from paraphrase_aligner.utils.text_utils import split_glosses

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Column layout of the words spreadsheet
COL_ID = 0
COL_SOURCE = 2
COL_CHANT = 3
COL_EXCLUDED = 4
COL_VERSE = 10
COL_TEXT = 19  # normalized text
COL_LEMMA = 20
COL_TAG = 21


def _read_sheets(path: PathLike) -> Dict[str, pd.DataFrame]:
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"file not found: {path}")
    try:
        sheets = pd.read_excel(path, sheet_name=None, header=None, dtype=str)
    except Exception as e:
        raise DataLoadError(f"cannot read spreadsheet {path}: {e}") from e
    return {name: frame.fillna("") for name, frame in sheets.items()}


def _cell(row: List[str], index: int) -> str:
    return row[index].strip() if index < len(row) else ""


def words_from_rows(rows: Iterable[List[str]]) -> DB:
    """
    Build words from spreadsheet rows (first row is the header).

    Rows without an id or a verse, and rows with a value in the exclusion
    column, are skipped.
    """
    data: DB = {}
    for i, row in enumerate(rows):
        if i == 0 or not _cell(row, COL_ID) or not _cell(row, COL_VERSE) or _cell(row, COL_EXCLUDED):
            continue
        source = _cell(row, COL_SOURCE)
        word = Word(
            id=get_word_id(source, _cell(row, COL_ID)),
            verse=_cell(row, COL_VERSE),
            chant=_cell(row, COL_CHANT),
            text=_cell(row, COL_TEXT),
            lemma=_cell(row, COL_LEMMA),
            tag=_cell(row, COL_TAG),
            source=source,
        )
        data[word.id] = word
    return data


def load_words(paths: Union[PathLike, Iterable[PathLike]]) -> DB:
    """Load every sheet of every words spreadsheet into one ID -> Word database"""
    if isinstance(paths, (str, Path)):
        paths = [paths]
    data: DB = {}
    for path in paths:
        for sheet_name, frame in _read_sheets(path).items():
            words = words_from_rows(frame.values.tolist())
            logger.info(f"📖 WORDS ► {len(words)} words from {Path(path).name} [{sheet_name}]")
            data.update(words)
    if not data:
        raise DataLoadError(f"no words found in {list(map(str, paths))}")
    return data


def vocabulary_from_rows(rows: Iterable[List[str]]) -> Dict[str, List[str]]:
    """lemma (col 0) -> glosses (col 1, hyphen separated), accumulated over rows"""
    voc: Dict[str, List[str]] = {}
    for row in rows:
        if len(row) < 2:
            continue
        lemma = str(row[0]).strip()
        if not lemma:
            continue
        voc.setdefault(lemma, []).extend(split_glosses(row[1]))
    return voc


def load_vocabulary(path: PathLike) -> Dict[str, List[str]]:
    """Load a lemma -> glosses table from the first sheet of a spreadsheet"""
    sheets = _read_sheets(path)
    if not sheets:
        raise DataLoadError(f"no sheet in {path}")
    first = next(iter(sheets.values()))
    voc = vocabulary_from_rows(first.values.tolist())
    logger.info(f"📘 VOCABULARY ► {len(voc)} lemmas from {Path(path).name}")
    return voc


def _read_json(path: PathLike) -> Mapping[str, Mapping[str, List[str]]]:
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(f"cannot read scholie JSON {path}: {e}") from e
    if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
        raise DataLoadError(f"scholie JSON {path} must map verses to {{key: [entries]}} objects")
    return data


def load_scholie(path: PathLike) -> ScholieIndex:
    """Load the scholie JSON ({verse: {key: [entries]}}) into a prefix index"""
    return ScholieIndex.from_verses(_read_json(path))


def load_scholie_table(path: PathLike) -> Dict[str, List[str]]:
    """Load the scholie JSON into an exact-match key -> entries table"""
    table: Dict[str, List[str]] = {}
    for verse_entries in _read_json(path).values():
        for key, values in verse_entries.items():
            table.setdefault(key, []).extend(values)
    return table
