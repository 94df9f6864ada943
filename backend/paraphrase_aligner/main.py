"""
Command Line Entry Point
========================

Runs one experiment: learn weights on part of the gold standard, align the
rest and report accuracy.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from paraphrase_aligner.alignment.alignment_utils import AlignmentError
from paraphrase_aligner.alignment.features import DEFAULT_FEATURE_NAMES, FEATURES
from paraphrase_aligner.config import settings
from paraphrase_aligner.config.paths import default_scholie_path, default_vocabulary_path
from paraphrase_aligner.services.alignment_service import AlignmentService
from paraphrase_aligner.services.logging_service import init_logging, setup_logging
from paraphrase_aligner.services.schemas import ExperimentConfig

logger = logging.getLogger(__name__)


def default_input(explicit: Optional[str], fallback: Path) -> Optional[str]:
    """An explicit path always wins; otherwise the default data file, if it exists"""
    if explicit:
        return explicit
    if fallback.exists():
        logger.info(f"📂 Using default data file {fallback}")
        return str(fallback)
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paraphrase-aligner",
        description="Learn feature weights and align a source text with its paraphrase.",
    )
    parser.add_argument("-w", dest="words", action="append", required=True,
                        help="Words database spreadsheet (repeatable)")
    parser.add_argument("-ts", dest="gold_standard", required=True, help="TMX gold standard file")
    parser.add_argument("-voc", dest="vocabulary",
                        help="Vocabulary spreadsheet (default: <DATA_DIR>/Vocabulaire_Genavensis.xlsx when present)")
    parser.add_argument("-equiv", dest="equiv_terms", help="Equivalent terms spreadsheet")
    parser.add_argument("-sch", dest="scholie",
                        help="Scholie JSON file (default: <DATA_DIR>/scholied.json when present)")

    parser.add_argument("--split", type=float, default=settings.SPLIT_FRACTION,
                        help="Share of problems used for training")
    parser.add_argument("--epochs", type=int, default=settings.EPOCHS)
    parser.add_argument("--burn-in", type=int, default=settings.BURN_IN,
                        help="Leading epochs excluded from the weight average")
    parser.add_argument("--initial-rate", type=float, default=settings.INITIAL_RATE)
    parser.add_argument("--decay-rate", type=float, default=settings.DECAY_RATE)
    parser.add_argument("--subseq-len", type=int, default=settings.SUBSEQ_LEN,
                        help="Maximum group size of a substitution")
    parser.add_argument("--features", nargs="+", default=list(DEFAULT_FEATURE_NAMES),
                        metavar="NAME", help=f"Features to use, among: {', '.join(FEATURES)}")
    parser.add_argument("--seed", type=int, default=settings.RANDOM_SEED)
    parser.add_argument("--workers", type=int, default=settings.SCORING_WORKERS,
                        help="Threads scoring candidate alignments")
    parser.add_argument("--max-steps", type=int, default=settings.MAX_ALIGN_STEPS,
                        help="Cap on search steps per problem (0 = none)")

    parser.add_argument("--log", dest="results_log", help="Append a results row to this TSV file")
    parser.add_argument("--export", help="Write the predicted test alignments as JSON")
    parser.add_argument("--log-dir", help="Directory of the rotating log file")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)
    log_file = init_logging(args.log_dir)
    logger.debug(f"Logging to {log_file}")

    try:
        config = ExperimentConfig(
            words_paths=args.words,
            gold_standard_path=args.gold_standard,
            vocabulary_path=default_input(args.vocabulary, default_vocabulary_path()),
            equiv_terms_path=args.equiv_terms,
            scholie_path=default_input(args.scholie, default_scholie_path()),
            split_fraction=args.split,
            epochs=args.epochs,
            burn_in=args.burn_in,
            initial_rate=args.initial_rate,
            decay_rate=args.decay_rate,
            subseq_len=args.subseq_len,
            features=args.features,
            seed=args.seed,
            workers=args.workers,
            max_steps=args.max_steps,
            results_log_path=args.results_log,
            export_path=args.export,
        )
    except ValidationError as e:
        logger.error(f"❌ Invalid configuration:\n{e}")
        return 2

    try:
        outcome = AlignmentService().run_experiment(config)
    except AlignmentError as e:
        logger.error(f"❌ Experiment failed: {e}")
        return 1

    summary = outcome.summary()
    print(f"Training problems: {summary['training_size']}")
    print(f"Test problems:     {summary['test_size']}")
    for name, weight in zip(summary['features'], summary['weights']):
        print(f"  {name:<22} {weight: .6f}")
    print(f"Edit accuracy:     {summary['edit_accuracy']:.4f}")
    print(f"Score accuracy:    {summary['score_accuracy']:.4f}")
    print(f"Learning time:     {summary['learn_seconds']:.2f}s")
    print(f"Alignment time:    {summary['align_seconds']:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
