"""
Alignment Service
================

Service layer for coordinating an experiment: load the corpus, split it,
learn the weights, align the held-out problems and report accuracy.
"""

import json
import logging
import random
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from paraphrase_aligner.alignment.accuracy import EvaluationReport, evaluate, split_gold_standard
from paraphrase_aligner.alignment.alignment import Alignment
from paraphrase_aligner.alignment.alignment_utils import ConfigurationError, log_alignment_statistics
from paraphrase_aligner.alignment.driver import make_align_fn
from paraphrase_aligner.alignment.features import FeatureContext, resolve_features
from paraphrase_aligner.alignment.greek_aligner import GreekAligner
from paraphrase_aligner.alignment.learner import learn
from paraphrase_aligner.alignment.words import GoldStandard
from paraphrase_aligner.corpus.gold_standard import load_gold_standard
from paraphrase_aligner.corpus.loaders import load_scholie, load_scholie_table, load_vocabulary, load_words
from paraphrase_aligner.services.experiment_log import ExperimentLogger, ExperimentRecord
from paraphrase_aligner.services.schemas import ExperimentConfig

logger = logging.getLogger(__name__)


@dataclass
class ExperimentOutcome:
    """Everything one experiment produced"""
    weights: np.ndarray
    report: EvaluationReport
    features: List[str]
    learn_seconds: float
    training_size: int
    test_size: int
    predictions: Dict[str, Alignment] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        return {
            'features': self.features,
            'weights': [float(w) for w in self.weights],
            'training_size': self.training_size,
            'test_size': self.test_size,
            'edit_accuracy': self.report.mean_edit_accuracy,
            'score_accuracy': self.report.mean_score_accuracy,
            'learn_seconds': self.learn_seconds,
            'align_seconds': self.report.elapsed_seconds,
        }


class AlignmentService:
    """
    Service class for coordinating the complete experiment workflow.

    Orchestrates:
    1. Data loading (words, vocabularies, scholie, gold standard)
    2. Weight learning on the training split
    3. Alignment and accuracy on the test split
    4. Results logging and optional JSON export
    """

    def __init__(self, aligner: Optional[GreekAligner] = None):
        self.aligner = aligner or GreekAligner()
        logger.info("🔧 Alignment Service initialized")

    def load_context(self, config: ExperimentConfig) -> FeatureContext:
        """Auxiliary data for the features"""
        context = FeatureContext(
            scholie_missing_score=config.scholie_missing_score,
            scholie_ins_del_score=config.scholie_ins_del_score,
        )
        if config.vocabulary_path:
            logger.info("📘 Loading vocabulary")
            context.vocabulary = load_vocabulary(config.vocabulary_path)
        if config.equiv_terms_path:
            logger.info("📗 Loading equivalent terms")
            context.equiv_terms = load_vocabulary(config.equiv_terms_path)
        if config.scholie_path:
            logger.info("📚 Loading scholie")
            context.scholie = load_scholie(config.scholie_path)
            context.scholie_table = load_scholie_table(config.scholie_path)
        return context

    def load_corpus(self, config: ExperimentConfig) -> List[GoldStandard]:
        logger.info("📖 Loading words database")
        words = load_words(config.words_paths)
        logger.info("🏅 Loading gold standard")
        return load_gold_standard(config.gold_standard_path, words)

    def run_experiment(
        self,
        config: ExperimentConfig,
        corpus: Optional[Sequence[GoldStandard]] = None,
        context: Optional[FeatureContext] = None,
    ) -> ExperimentOutcome:
        """
        Run one experiment end to end.

        Args:
            config: Validated experiment configuration
            corpus: Pre-loaded gold standard (loaded from config when omitted)
            context: Pre-loaded feature context (loaded from config when omitted)

        Returns:
            ExperimentOutcome with the learned weights and the test report
        """
        context = context if context is not None else self.load_context(config)
        corpus = list(corpus) if corpus is not None else self.load_corpus(config)
        features = resolve_features(config.features)

        training_set, test_set = split_gold_standard(corpus, config.split_fraction)
        logger.info(
            f"🚀 EXPERIMENT ► {len(training_set)} training / {len(test_set)} test problems, "
            f"k={config.subseq_len}, features={config.features}"
        )

        align_fn = make_align_fn(
            self.aligner,
            features,
            config.subseq_len,
            context,
            max_steps=config.max_steps or None,
            workers=config.workers,
        )

        start = time.time()
        weights = learn(
            training_set,
            config.epochs,
            config.burn_in,
            config.initial_rate,
            config.decay_rate,
            features,
            align_fn,
            context,
            rng=random.Random(config.seed),
        )
        learn_seconds = time.time() - start
        if len(weights) != len(features):
            raise ConfigurationError("learning produced no weights; check epochs and burn-in")

        report = evaluate(test_set, align_fn, features, weights, context)
        predictions = {result.problem_id: result.got for result in report.results}
        for problem_id, predicted in list(predictions.items())[:3]:
            log_alignment_statistics(predicted, label=problem_id)

        outcome = ExperimentOutcome(
            weights=weights,
            report=report,
            features=list(config.features),
            learn_seconds=learn_seconds,
            training_size=len(training_set),
            test_size=len(test_set),
            predictions=predictions,
        )

        if config.results_log_path:
            self.log_results(outcome, config, Path(config.results_log_path))
        if config.export_path:
            self.export_predictions(predictions, Path(config.export_path))
        return outcome

    def log_results(self, outcome: ExperimentOutcome, config: ExperimentConfig, path: Path) -> None:
        ExperimentLogger(out_path=path).log(ExperimentRecord(
            test_index=outcome.test_size,
            features=outcome.features,
            edit_accuracy=outcome.report.mean_edit_accuracy,
            score_accuracy=outcome.report.mean_score_accuracy,
            learn_seconds=outcome.learn_seconds,
            align_seconds=outcome.report.elapsed_seconds,
            weights=[float(w) for w in outcome.weights],
            split_fraction=config.split_fraction,
            epochs=config.epochs,
            subseq_len=config.subseq_len,
            metadata={'burn_in': config.burn_in, 'seed': config.seed},
        ))

    def export_predictions(self, predictions: Dict[str, Alignment], path: Path) -> None:
        """Write every predicted alignment as word-id indexed JSON edits"""
        payload = {}
        for problem_id, alignment in predictions.items():
            by_source, by_target = alignment.to_json_edits()
            payload[problem_id] = {
                'source': {k: v.to_dict() for k, v in by_source.items()},
                'target': {k: v.to_dict() for k, v in by_target.items()},
            }
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8') as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        logger.info(f"💾 EXPORT ► {len(payload)} alignments written to {path}")
