"""
Alignment Utilities
===================

Error types and small logging helpers shared by the alignment engine.
"""

import logging
from collections import Counter
from typing import Dict, Sequence

logger = logging.getLogger(__name__)


class AlignmentError(Exception):
    """Raised when alignment operations fail"""
    pass


class ConfigurationError(AlignmentError, ValueError):
    """Raised when features, weights or hyperparameters do not fit together"""
    pass


class InvariantViolation(AlignmentError, AssertionError):
    """Raised when an internal invariant of the search is broken"""
    pass


class DataLoadError(AlignmentError):
    """Raised when an input file is missing or malformed"""
    pass


def check_lengths(features: Sequence, weights: Sequence) -> None:
    """
    Ensure every feature has exactly one weight.

    Raises:
        ConfigurationError: if the lengths differ
    """
    if len(features) != len(weights):
        raise ConfigurationError(
            f"features and weights len mismatch: {len(features)} features, {len(weights)} weights"
        )


def count_edit_kinds(alignment) -> Dict[str, int]:
    """Count the edits of an alignment per kind ('ins', 'del', 'eq', 'sub')"""
    counts = Counter(edit.kind.value for edit in alignment)
    return {kind: counts.get(kind, 0) for kind in ("ins", "del", "eq", "sub")}


def log_alignment_statistics(alignment, label: str = "alignment") -> None:
    """Log alignment statistics for debugging"""
    counts = count_edit_kinds(alignment)
    logger.info(
        f"📊 ALIGNMENT STATS ► {label}: {len(alignment)} edits "
        f"(eq={counts['eq']}, sub={counts['sub']}, del={counts['del']}, ins={counts['ins']})"
    )
