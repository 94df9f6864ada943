"""
Structured Perceptron Learner
=============================

Averaged structured perceptron calibrating the feature weights against a
gold-standard corpus, with the alignment driver as a black-box predictor.

Per epoch: decay the learning rate, shuffle the training set, and for every
example move the weights by R * (phi(gold) - phi(predicted)); then L2
normalize. The weights of the epochs after the burn-in are averaged.
"""

from __future__ import annotations

import logging
import random
import time
from typing import List, Optional, Sequence

import numpy as np

from paraphrase_aligner.alignment.alignment import phi
from paraphrase_aligner.alignment.alignment_utils import ConfigurationError
from paraphrase_aligner.alignment.driver import AlignFn
from paraphrase_aligner.alignment.features import Feature, FeatureContext
from paraphrase_aligner.alignment.vectors import Vector, avg, diff, norm2, normalize, scale, vsum
from paraphrase_aligner.alignment.words import GoldStandard

logger = logging.getLogger(__name__)


def learn(
    training_set: Sequence[GoldStandard],
    epochs: int,
    burn_in: int,
    initial_rate: float,
    decay_rate: float,
    features: Sequence[Feature],
    align_fn: AlignFn,
    context: FeatureContext,
    rng: Optional[random.Random] = None,
) -> Vector:
    """
    Learn one weight per feature.

    Args:
        training_set: Gold-standard problems (not modified; a copy is shuffled)
        epochs: Number of epochs (N)
        burn_in: Leading epochs left out of the average (N0)
        initial_rate: Initial learning rate (R0)
        decay_rate: Rate multiplier applied at the start of every epoch (r)
        features: Feature functions
        align_fn: Predictor `(problem, weights) -> alignment`
        context: Auxiliary data used to compute phi
        rng: Random source for the shuffle

    Returns:
        The average of the post burn-in epoch weights. With burn_in >= epochs
        nothing is left to average and an empty vector is returned.
    """
    if epochs < 0 or burn_in < 0:
        raise ConfigurationError(f"epochs ({epochs}) and burn-in ({burn_in}) must be non-negative")
    if burn_in >= epochs:
        logger.warning(f"⚠️ Burn-in ({burn_in}) covers every epoch ({epochs}): no weights to average")

    rng = rng or random.Random()
    weights: Vector = np.ones(len(features), dtype=float)
    history: List[Vector] = []
    examples = list(training_set)
    rate = initial_rate

    start = time.time()
    logger.info(
        f"🎓 LEARNING ► {len(examples)} problems, {epochs} epochs (burn-in {burn_in}), "
        f"R0={initial_rate}, r={decay_rate}, {len(features)} features"
    )
    for epoch in range(epochs):
        epoch_start = time.time()
        rate = decay_rate * rate
        rng.shuffle(examples)
        for j, example in enumerate(examples):
            predicted = align_fn(example.problem, weights)
            example_context = context.fresh()
            update = diff(
                phi(example.alignment, features, example_context),
                phi(predicted, features, example_context),
            )
            weights = vsum(weights, scale(update, rate))
            logger.debug(f"   {j + 1}/{len(examples)} of epoch {epoch + 1}/{epochs} ► {example.id}")

        weights = normalize(weights, norm2)
        history.append(weights)
        logger.info(
            f"   📈 Epoch {epoch + 1}/{epochs} finished in {time.time() - epoch_start:.2f}s ► "
            f"w={np.round(weights, 4).tolist()}"
        )

    logger.info(f"✅ LEARNING COMPLETE ► Trained in {time.time() - start:.2f}s")
    return avg(history[burn_in:])
