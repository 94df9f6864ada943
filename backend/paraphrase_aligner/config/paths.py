"""
Centralized path configuration for input data and experiment output.

Responsibilities:
- Locate the project root in dev (editable install) mode.
- Provide the default locations of the corpus files and of the results log.
"""

from __future__ import annotations

import os
from pathlib import Path


def package_root() -> Path:
    """paraphrase_aligner/config/paths.py -> paraphrase_aligner"""
    return Path(__file__).resolve().parents[1]


def project_root() -> Path:
    """Repository root (parent of the backend directory)"""
    return package_root().parents[1]


def data_root() -> Path:
    """Root of the corpus files; DATA_DIR overrides <project>/data"""
    return Path(os.getenv("DATA_DIR") or project_root() / "data")


def logs_root() -> Path:
    root = Path(os.getenv("LOG_DIR") or project_root() / "logs")
    root.mkdir(parents=True, exist_ok=True)
    return root


# ----- Default inputs -----

def default_vocabulary_path() -> Path:
    return data_root() / "Vocabulaire_Genavensis.xlsx"


def default_scholie_path() -> Path:
    return data_root() / "scholied.json"


# ----- Outputs -----

def default_results_log_path() -> Path:
    return logs_root() / "results.tsv"
