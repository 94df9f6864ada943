from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from paraphrase_aligner.alignment.features import DEFAULT_FEATURE_NAMES, FEATURES
from paraphrase_aligner.config import settings


class ExperimentConfig(BaseModel):
    """
    Defines one training + evaluation run: where the corpus files are and
    which hyperparameters to use. Defaults come from config.settings.
    """
    words_paths: List[str] = Field(min_length=1)
    gold_standard_path: str
    vocabulary_path: Optional[str] = None
    equiv_terms_path: Optional[str] = None
    scholie_path: Optional[str] = None

    split_fraction: float = Field(default=settings.SPLIT_FRACTION, ge=0.0, le=1.0)
    epochs: int = Field(default=settings.EPOCHS, ge=1)
    burn_in: int = Field(default=settings.BURN_IN, ge=0)
    initial_rate: float = Field(default=settings.INITIAL_RATE, gt=0.0)
    decay_rate: float = Field(default=settings.DECAY_RATE, gt=0.0)
    subseq_len: int = Field(default=settings.SUBSEQ_LEN, ge=1)
    features: List[str] = Field(default_factory=lambda: list(DEFAULT_FEATURE_NAMES), min_length=1)

    seed: Optional[int] = settings.RANDOM_SEED
    max_steps: int = Field(default=settings.MAX_ALIGN_STEPS, ge=0)
    workers: int = Field(default=settings.SCORING_WORKERS, ge=1)
    scholie_missing_score: float = settings.SCHOLIE_MISSING_SCORE
    scholie_ins_del_score: float = settings.SCHOLIE_INS_DEL_SCORE

    results_log_path: Optional[str] = None
    export_path: Optional[str] = None

    @field_validator("features")
    @classmethod
    def known_features(cls, names: List[str]) -> List[str]:
        unknown = [name for name in names if name not in FEATURES]
        if unknown:
            raise ValueError(f"unknown features {unknown}; available: {sorted(FEATURES)}")
        return names

    @model_validator(mode="after")
    def burn_in_leaves_epochs(self) -> "ExperimentConfig":
        if self.burn_in >= self.epochs:
            raise ValueError(f"burn_in ({self.burn_in}) must be smaller than epochs ({self.epochs})")
        return self
