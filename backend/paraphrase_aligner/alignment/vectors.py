"""
Vector Arithmetic
=================

Fixed-length weight/feature vector operations on top of NumPy.
Every function returns a new array and leaves its inputs untouched.
"""

from typing import Callable, Sequence

import numpy as np

Vector = np.ndarray


def as_vector(values: Sequence[float]) -> Vector:
    return np.array(values, dtype=float)


def _check_same_length(v1: Sequence[float], v2: Sequence[float]) -> None:
    if len(v1) != len(v2):
        raise ValueError(f"vector length mismatch: {len(v1)} != {len(v2)}")


def vsum(v1: Sequence[float], v2: Sequence[float]) -> Vector:
    """Elementwise sum"""
    _check_same_length(v1, v2)
    return as_vector(v1) + as_vector(v2)


def diff(v1: Sequence[float], v2: Sequence[float]) -> Vector:
    """Elementwise difference v1 - v2"""
    _check_same_length(v1, v2)
    return as_vector(v1) - as_vector(v2)


def scale(v: Sequence[float], k: float) -> Vector:
    return as_vector(v) * k


def norm2(v: Sequence[float]) -> float:
    """Euclidean norm"""
    return float(np.linalg.norm(as_vector(v))) if len(v) else 0.0


def normalize(v: Sequence[float], norm_fn: Callable[[Sequence[float]], float] = norm2) -> Vector:
    """Divide by the norm; a zero norm is treated as 1"""
    norm = norm_fn(v)
    if norm == 0.0:
        norm = 1.0
    return as_vector(v) / norm


def avg(vectors: Sequence[Sequence[float]]) -> Vector:
    """Elementwise mean; an empty input yields an empty vector"""
    if len(vectors) == 0:
        return np.array([], dtype=float)
    return np.mean(np.vstack([as_vector(v) for v in vectors]), axis=0)


def equals(v1: Sequence[float], v2: Sequence[float]) -> bool:
    """Exact elementwise equality, False on length mismatch"""
    if len(v1) != len(v2):
        return False
    return bool(np.array_equal(as_vector(v1), as_vector(v2)))
