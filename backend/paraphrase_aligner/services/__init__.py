"""
Services package
================

Experiment orchestration, results logging and logging setup.
"""

from paraphrase_aligner.services.alignment_service import AlignmentService, ExperimentOutcome
from paraphrase_aligner.services.experiment_log import ExperimentLogger, ExperimentRecord
from paraphrase_aligner.services.schemas import ExperimentConfig

__all__ = [
    "AlignmentService",
    "ExperimentOutcome",
    "ExperimentConfig",
    "ExperimentLogger",
    "ExperimentRecord",
]
