"""
Central configuration for the aligner settings.

Every value can be overridden from the environment (or a .env file loaded by
the CLI). Command-line flags take precedence over these defaults.
"""
import os


def _optional_int(name: str):
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


# Maximum group size of a substitution edit (k)
SUBSEQ_LEN: int = int(os.getenv("SUBSEQ_LEN", "5"))

# Structured perceptron
EPOCHS: int = int(os.getenv("EPOCHS", "50"))
BURN_IN: int = int(os.getenv("BURN_IN", "10"))
INITIAL_RATE: float = float(os.getenv("INITIAL_RATE", "1.0"))
DECAY_RATE: float = float(os.getenv("DECAY_RATE", "0.8"))

# Share of the gold standard used for training (about 30%)
SPLIT_FRACTION: float = float(os.getenv("SPLIT_FRACTION", "0.3"))

# ScholieDistance defaults: benefit of the doubt when there is nothing to compare
SCHOLIE_MISSING_SCORE: float = float(os.getenv("SCHOLIE_MISSING_SCORE", "1.0"))
SCHOLIE_INS_DEL_SCORE: float = float(os.getenv("SCHOLIE_INS_DEL_SCORE", "1.0"))

# Safety cap on greedy search steps per problem (0 = unbounded)
MAX_ALIGN_STEPS: int = int(os.getenv("MAX_ALIGN_STEPS", "0"))

# Candidate scoring workers (1 = single-threaded)
SCORING_WORKERS: int = int(os.getenv("SCORING_WORKERS", "1"))

# Seed for the training set shuffle (unset = nondeterministic)
RANDOM_SEED = _optional_int("RANDOM_SEED")
