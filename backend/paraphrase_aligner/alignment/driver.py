"""
Alignment Driver
================

Greedy hill-climbing search: ask the aligner for candidate next states, score
each with the current weights, keep the best (first one on exact ties) and
repeat until the aligner has nothing left to propose.
"""

from __future__ import annotations

import concurrent.futures
import logging
import math
from typing import Callable, List, Optional, Sequence

from paraphrase_aligner.alignment.alignment import Alignment
from paraphrase_aligner.alignment.alignment_utils import AlignmentError, check_lengths
from paraphrase_aligner.alignment.features import Feature, FeatureContext
from paraphrase_aligner.alignment.greek_aligner import Aligner
from paraphrase_aligner.alignment.words import Problem

logger = logging.getLogger(__name__)

AlignFn = Callable[[Problem, Sequence[float]], Alignment]


def _score_candidates(
    candidates: List[Alignment],
    features: Sequence[Feature],
    weights: Sequence[float],
    context: FeatureContext,
    executor: Optional[concurrent.futures.Executor],
) -> List[float]:
    """Scores in candidate order, whatever order the workers finish in"""
    if executor is None:
        return [c.score(features, weights, context) for c in candidates]
    return list(executor.map(lambda c: c.score(features, weights, context), candidates))


def select_best(candidates: List[Alignment], scores: List[float]) -> Alignment:
    """Highest score wins; on exact ties the earliest candidate wins"""
    best_index, best_score = 0, -math.inf
    for i, score in enumerate(scores):
        if score > best_score:
            best_index, best_score = i, score
    return candidates[best_index]


def align(
    alignment: Alignment,
    aligner: Aligner,
    features: Sequence[Feature],
    weights: Sequence[float],
    subseq_len: int,
    context: FeatureContext,
    max_steps: Optional[int] = None,
    workers: int = 1,
    reset_cache: bool = True,
) -> Alignment:
    """
    Run the greedy search from `alignment` to a terminal state.

    Args:
        alignment: Starting state (usually Alignment.from_word_bags)
        aligner: Next-state generator
        features: Feature functions
        weights: One weight per feature
        subseq_len: Maximum substitution group size (k)
        context: Auxiliary data and feature cache for this run
        max_steps: Optional cap on greedy steps
        workers: Candidate scoring threads (1 = sequential)
        reset_cache: Clear the context cache before searching

    Returns:
        The terminal alignment

    Raises:
        ConfigurationError: features and weights differ in length
        AlignmentError: the step cap was exceeded
    """
    check_lengths(features, weights)
    if reset_cache:
        context.reset()

    executor = concurrent.futures.ThreadPoolExecutor(max_workers=workers) if workers > 1 else None
    try:
        current = alignment
        steps = 0
        while True:
            candidates = aligner.next(current, subseq_len)
            if not candidates:
                logger.debug(f"🏁 SEARCH DONE ► {steps} steps, {len(current)} edits")
                return current
            if max_steps and steps >= max_steps:
                raise AlignmentError(f"search exceeded {max_steps} steps")

            scores = _score_candidates(candidates, features, weights, context, executor)
            current = select_best(candidates, scores)
            steps += 1
    finally:
        if executor is not None:
            executor.shutdown(wait=True)


def make_align_fn(
    aligner: Aligner,
    features: Sequence[Feature],
    subseq_len: int,
    context: FeatureContext,
    max_steps: Optional[int] = None,
    workers: int = 1,
) -> AlignFn:
    """
    Build the `(problem, weights) -> alignment` predictor used by the learner
    and the evaluation. Each call searches with its own fresh feature cache.
    """

    def align_problem(problem: Problem, weights: Sequence[float]) -> Alignment:
        start = Alignment.from_word_bags(problem.source, problem.target)
        return align(
            start,
            aligner,
            features,
            weights,
            subseq_len,
            context.fresh(),
            max_steps=max_steps,
            workers=workers,
            reset_cache=False,
        )

    return align_problem
