"""
Greek Aligner
=============

Next-state generator for the greedy search over Greek source/paraphrase verses.

From a partial alignment it proposes every alignment one step closer to
completion:

1. no del edit left -> no candidate (terminal state)
2. eq pass: each (del, ins) pair whose texts match once punctuation is removed
   becomes an eq edit; when any such pair exists only these are proposed
3. sub pass: every (del subset, ins subset) pair of sizes 1..k becomes a sub
   edit replacing every edit that touches one of its words

Candidate order is fixed (alignment order for eq, id order and lexicographic
index combinations for sub) because the driver breaks score ties by position.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Iterable, List, Protocol, Sequence

from paraphrase_aligner.alignment.alignment import Alignment
from paraphrase_aligner.alignment.alignment_utils import ConfigurationError
from paraphrase_aligner.alignment.edits import Edit, EditKind
from paraphrase_aligner.alignment.words import Word, sorted_words
from paraphrase_aligner.utils.text_utils import remove_punctuation

logger = logging.getLogger(__name__)


class Aligner(Protocol):
    """Search strategy proposing the legal next states of an alignment"""

    def next(self, alignment: Alignment, subseq_len: int) -> List[Alignment]:
        ...


def limited_subsequences(words: Sequence[Word], limit: int) -> List[List[Word]]:
    """
    Every subset of 1..limit words, as index combinations in lexicographic
    order, smaller sizes first. Word order inside a subset follows `words`.
    """
    result: List[List[Word]] = []
    for size in range(1, min(limit, len(words)) + 1):
        for indexes in combinations(range(len(words)), size):
            result.append([words[i] for i in indexes])
    return result


def remove_edits_with_words(alignment: Alignment, words: Iterable[Word]) -> None:
    """Remove from the alignment every edit using any of the words (matched by id)"""
    ids = {w.id for w in words}
    doomed = [
        edit for edit in alignment
        if any(w.id in ids for w in edit.source) or any(w.id in ids for w in edit.target)
    ]
    alignment.remove(*doomed)


class GreekAligner:
    """Eq-first, then bounded substitution grouping"""

    def next(self, alignment: Alignment, subseq_len: int) -> List[Alignment]:
        if subseq_len < 1:
            raise ConfigurationError(f"subsequence length must be at least 1, got {subseq_len}")

        dels = alignment.filter(EditKind.DEL)
        if not dels:
            return []
        inss = alignment.filter(EditKind.INS)

        candidates = self._equalities(alignment, dels, inss)
        if candidates:
            return candidates
        return self._substitutions(alignment, dels, inss, subseq_len)

    def _equalities(self, alignment: Alignment, dels: List[Edit], inss: List[Edit]) -> List[Alignment]:
        candidates: List[Alignment] = []
        ins_texts = [(ins, remove_punctuation(ins.word.text)) for ins in inss]
        for deletion in dels:
            text = remove_punctuation(deletion.word.text)
            for insertion, ins_text in ins_texts:
                if text != ins_text:
                    continue
                candidate = alignment.clone()
                candidate.remove(deletion, insertion)
                candidate.add(Edit.eq(deletion.word, insertion.word))
                candidates.append(candidate)
        return candidates

    def _substitutions(
        self, alignment: Alignment, dels: List[Edit], inss: List[Edit], subseq_len: int
    ) -> List[Alignment]:
        del_groups = limited_subsequences(sorted_words(e.word for e in dels), subseq_len)
        ins_groups = limited_subsequences(sorted_words(e.word for e in inss), subseq_len)

        candidates: List[Alignment] = []
        for source in del_groups:
            for target in ins_groups:
                candidate = alignment.clone()
                remove_edits_with_words(candidate, source + target)
                candidate.add(Edit.sub(source, target))
                candidates.append(candidate)

        logger.debug(
            f"🔀 SUB PASS ► {len(dels)} dels x {len(inss)} ins, k={subseq_len}: {len(candidates)} candidates"
        )
        return candidates
