"""
Gold Standard
=============

Builds the alignment problems from the words database and fills their
reference alignments from a TMX translation memory.

Each TMX translation unit holds two segments (source, then paraphrase) whose
tokens carry the raw word id as `...{<first>-<n>}...`.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Sequence, Union

from paraphrase_aligner.alignment.alignment import Alignment
from paraphrase_aligner.alignment.alignment_utils import DataLoadError
from paraphrase_aligner.alignment.edits import Edit
from paraphrase_aligner.alignment.words import (
    DB,
    SOURCE_TAG,
    TARGET_TAG,
    GoldStandard,
    Problem,
    Word,
    get_problem_id,
    get_word_id,
)

logger = logging.getLogger(__name__)

TOKEN_ID_PATTERN = re.compile(r"(.*\{(?P<first>\d+)\-\d+\}).*")


def problem_sort_key(problem_id: str):
    """Order "chant.verse" ids numerically when possible"""
    parts = []
    for part in problem_id.split("."):
        parts.append((0, int(part), "") if part.isdigit() else (1, 0, part))
    return tuple(parts)


def build_problems(words: DB) -> Dict[str, GoldStandard]:
    """Group the words per verse: source-corpus words on one side, paraphrase words on the other"""
    problems: Dict[str, GoldStandard] = {}
    for word in words.values():
        if not word.chant or not word.verse or not word.source:
            raise DataLoadError(f"word {word.id!r} has no chant, verse or source")
        problem_id = get_problem_id(word.chant, word.verse)
        gold = problems.get(problem_id)
        if gold is None:
            gold = GoldStandard(id=problem_id, problem=Problem(), alignment=Alignment())
            problems[problem_id] = gold
        if word.source == SOURCE_TAG:
            gold.problem.source[word.id] = word
        elif word.source == TARGET_TAG:
            gold.problem.target[word.id] = word
    return problems


def can_get_edit(source: Sequence[Word], target: Sequence[Word]) -> bool:
    is_ins = len(source) == 0 and len(target) == 1
    is_del = len(source) == 1 and len(target) == 0
    not_empty = len(source) > 0 and len(target) > 0
    return is_ins or is_del or not_empty


def edit_from_unit(source: Sequence[Word], target: Sequence[Word]) -> Edit:
    """Reference edit for one translation unit"""
    if len(source) == 1 and not target:
        return Edit.delete(source[0])
    if not source and len(target) == 1:
        return Edit.ins(target[0])
    if len(source) == 1 and len(target) == 1 and source[0].text == target[0].text:
        return Edit.eq(source[0], target[0])
    return Edit.sub(source, target)


def token_word_id(token: str) -> str:
    match = TOKEN_ID_PATTERN.match(token)
    if match is None:
        raise DataLoadError(f"cannot read a word id from TMX token {token!r}")
    return match.group("first")


def words_from_segment(text: str, source: str, words: DB) -> List[Word]:
    """Words of a TMX segment that exist in the database, in segment order"""
    found: List[Word] = []
    for token in (text or "").split(" "):
        if not token:
            continue
        word = words.get(get_word_id(source, token_word_id(token)))
        if word is not None:
            found.append(word)
    return found


def _segments(path: Path) -> List[List[str]]:
    try:
        root = ET.parse(path).getroot()
    except (OSError, ET.ParseError) as e:
        raise DataLoadError(f"cannot read TMX file {path}: {e}") from e
    units = []
    for tu in root.iter("tu"):
        segs = [tuv.findtext("seg", default="") for tuv in tu.findall("tuv")]
        if len(segs) < 2:
            raise DataLoadError(f"TMX unit with {len(segs)} segments in {path}")
        units.append(segs)
    return units


def load_gold_standard(path: Union[str, Path], words: DB) -> List[GoldStandard]:
    """
    Problems of the words database with their reference alignments.

    Returns the problems ordered by chant and verse.
    """
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"file not found: {path}")

    problems = build_problems(words)
    skipped = 0
    for segs in _segments(path):
        source = words_from_segment(segs[0], SOURCE_TAG, words)
        target = words_from_segment(segs[1], TARGET_TAG, words)
        if not can_get_edit(source, target):
            skipped += 1
            continue
        edit = edit_from_unit(source, target)
        gold = problems.get(edit.problem_id)
        if gold is None:
            logger.warning(f"⚠️ Gold edit {edit} belongs to unknown problem {edit.problem_id}")
            skipped += 1
            continue
        gold.alignment.add(edit)

    corpus = [problems[k] for k in sorted(problems, key=problem_sort_key)]
    logger.info(f"🏅 GOLD STANDARD ► {len(corpus)} problems from {path.name} ({skipped} units skipped)")
    return corpus
