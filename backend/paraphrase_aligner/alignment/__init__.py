"""
Alignment Engine
================

Edit/alignment model, feature library, Greek next-state generator, greedy
alignment driver and structured perceptron learner for aligning a source text
with its paraphrase.
"""

# Data model
from paraphrase_aligner.alignment.words import (
    DB,
    GoldStandard,
    Problem,
    Word,
    WordsBag,
    get_word_id,
    sum_words,
    word_sort_key,
)
from paraphrase_aligner.alignment.edits import Edit, EditKind, JsonEdit
from paraphrase_aligner.alignment.alignment import Alignment, merge_alignments, phi, score_accuracy

# Features
from paraphrase_aligner.alignment.features import (
    DEFAULT_FEATURE_NAMES,
    DEFAULT_FEATURES,
    FEATURES,
    Feature,
    FeatureContext,
    resolve_features,
)
from paraphrase_aligner.alignment.scholie import ScholieIndex

# Search and learning
from paraphrase_aligner.alignment.greek_aligner import Aligner, GreekAligner, limited_subsequences
from paraphrase_aligner.alignment.driver import align, make_align_fn
from paraphrase_aligner.alignment.learner import learn
from paraphrase_aligner.alignment.accuracy import EvaluationReport, evaluate, split_gold_standard

# Utilities
from paraphrase_aligner.alignment.alignment_utils import (
    AlignmentError,
    ConfigurationError,
    DataLoadError,
    InvariantViolation,
)

__all__ = [
    # Data model
    'DB',
    'GoldStandard',
    'Problem',
    'Word',
    'WordsBag',
    'get_word_id',
    'sum_words',
    'word_sort_key',
    'Edit',
    'EditKind',
    'JsonEdit',
    'Alignment',
    'merge_alignments',
    'phi',
    'score_accuracy',

    # Features
    'DEFAULT_FEATURE_NAMES',
    'DEFAULT_FEATURES',
    'FEATURES',
    'Feature',
    'FeatureContext',
    'resolve_features',
    'ScholieIndex',

    # Search and learning
    'Aligner',
    'GreekAligner',
    'limited_subsequences',
    'align',
    'make_align_fn',
    'learn',
    'EvaluationReport',
    'evaluate',
    'split_gold_standard',

    # Errors
    'AlignmentError',
    'ConfigurationError',
    'DataLoadError',
    'InvariantViolation',
]
