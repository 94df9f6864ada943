"""
Accuracy Evaluation
===================

Runs the trained aligner over a held-out set and compares every prediction
with its gold alignment, by edits and by score.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from paraphrase_aligner.alignment.alignment import Alignment, score_accuracy
from paraphrase_aligner.alignment.alignment_utils import ConfigurationError
from paraphrase_aligner.alignment.driver import AlignFn
from paraphrase_aligner.alignment.features import Feature, FeatureContext
from paraphrase_aligner.alignment.words import GoldStandard

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    """Accuracy of one predicted alignment"""
    problem_id: str
    edit_accuracy: float
    score_accuracy: float
    expected: Alignment
    got: Alignment


@dataclass
class EvaluationReport:
    """Accuracy over a whole test set"""
    results: List[EvaluationResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def mean_edit_accuracy(self) -> float:
        if not self.results:
            return 0.0
        return float(np.mean([r.edit_accuracy for r in self.results]))

    @property
    def mean_score_accuracy(self) -> float:
        if not self.results:
            return 0.0
        return float(np.mean([r.score_accuracy for r in self.results]))

    def __len__(self) -> int:
        return len(self.results)


def split_gold_standard(
    corpus: Sequence[GoldStandard], fraction: float
) -> Tuple[List[GoldStandard], List[GoldStandard]]:
    """First `int(fraction * n)` problems for training, the rest for testing"""
    if not 0.0 <= fraction <= 1.0:
        raise ConfigurationError(f"split fraction must be within [0, 1], got {fraction}")
    split_index = int(fraction * len(corpus))
    return list(corpus[:split_index]), list(corpus[split_index:])


def evaluate(
    test_set: Sequence[GoldStandard],
    align_fn: AlignFn,
    features: Sequence[Feature],
    weights: Sequence[float],
    context: FeatureContext,
) -> EvaluationReport:
    """Align every test problem with the given weights and measure accuracy"""
    logger.info(f"🔍 EVALUATION ► Aligning {len(test_set)} test problems")
    report = EvaluationReport()
    start = time.time()
    for i, gold in enumerate(test_set):
        predicted = align_fn(gold.problem, weights)
        result = EvaluationResult(
            problem_id=gold.id,
            edit_accuracy=predicted.edits_accuracy(gold.alignment),
            score_accuracy=score_accuracy(gold.alignment, predicted, features, weights, context.fresh()),
            expected=gold.alignment,
            got=predicted,
        )
        report.results.append(result)
        logger.debug(
            f"   {gold.id} ({i * 100 // max(len(test_set), 1)}%) ► "
            f"edit accuracy {result.edit_accuracy:.3f}, score accuracy {result.score_accuracy:.3f}"
        )
        logger.debug(f"      Expected: {gold.alignment}")
        logger.debug(f"      Got: {predicted}")
    report.elapsed_seconds = time.time() - start
    logger.info(
        f"✅ EVALUATION COMPLETE ► edit accuracy {report.mean_edit_accuracy:.3f}, "
        f"score accuracy {report.mean_score_accuracy:.3f} in {report.elapsed_seconds:.2f}s"
    )
    return report
