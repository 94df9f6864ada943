from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from paraphrase_aligner.config.paths import default_results_log_path

logger = logging.getLogger(__name__)


@dataclass
class ExperimentRecord:
    """One row of the results log"""
    test_index: int
    features: List[str]
    edit_accuracy: float
    score_accuracy: float
    learn_seconds: float
    align_seconds: float
    weights: List[float]
    split_fraction: float = 0.0
    epochs: int = 0
    subseq_len: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ExperimentLogger:
    """
    Tab-separated results log, one row per experiment.

    The header is written when the file is created; later runs append.
    """

    out_path: Path = field(default_factory=default_results_log_path)

    def log(self, record: ExperimentRecord) -> None:
        self.out_path.parent.mkdir(parents=True, exist_ok=True)
        payload: Dict[str, Any] = asdict(record)
        payload["features"] = ",".join(record.features)
        payload["weights"] = ",".join(f"{w:.6f}" for w in record.weights)
        payload["metadata"] = ";".join(f"{k}={v}" for k, v in sorted(record.metadata.items()))
        payload["_ts"] = datetime.now(timezone.utc).isoformat()

        frame = pd.DataFrame([payload])
        write_header = not self.out_path.exists() or self.out_path.stat().st_size == 0
        frame.to_csv(self.out_path, sep="\t", mode="a", header=write_header, index=False)
        logger.info(f"📝 RESULTS LOGGED ► {self.out_path}")

    def read(self) -> pd.DataFrame:
        return pd.read_csv(self.out_path, sep="\t")
