"""
Cosine similarity over dense float64 vectors.
"""

import numpy as np

from embedding_db.core.errors import DimensionMismatch, InvalidVector, ZeroVector
from .types import VectorLike

ZERO_POLICY_RAISE = "raise"
ZERO_POLICY_ZERO = "zero"
ZERO_POLICIES = (ZERO_POLICY_RAISE, ZERO_POLICY_ZERO)


def as_vector(values: VectorLike, dim: int = None) -> np.ndarray:
    """
    Coerce values to a read-only 1-D float64 array.

    Args:
        values: Sequence of numbers or numpy array
        dim: Expected length, checked when given

    Raises:
        DimensionMismatch: if the length differs from dim
        InvalidVector: if the array is not 1-D or has NaN or infinite components
    """
    vector = np.array(values, dtype=np.float64)
    if vector.ndim != 1:
        raise InvalidVector(f"Vector must be one-dimensional, got shape {vector.shape}")
    if dim is not None and vector.shape[0] != dim:
        raise DimensionMismatch(dim, vector.shape[0])
    if not np.all(np.isfinite(vector)):
        raise InvalidVector("Vector components must be finite")
    vector.flags.writeable = False
    return vector


def cosine_similarity(a: VectorLike, b: VectorLike, zero_policy: str = ZERO_POLICY_RAISE) -> float:
    """
    Compute dot(a, b) / (||a|| * ||b||).

    A zero vector has no direction. Under the "raise" policy this is a
    ZeroVector error; under "zero" the similarity is reported as 0.0.

    Each operand is divided by its largest absolute component first, so
    dot products and norms neither overflow for huge components nor
    underflow to zero for tiny ones. The result is clamped to [-1, 1].

    Raises:
        DimensionMismatch: if a and b differ in length
        ZeroVector: if either vector is all zeros and zero_policy is "raise"
        InvalidVector: if an operand has NaN or infinite components
    """
    if zero_policy not in ZERO_POLICIES:
        raise ValueError(f"Unknown zero-vector policy: {zero_policy}")

    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise DimensionMismatch(a.size, b.size)

    scale_a = max_abs(a)
    scale_b = max_abs(b)
    if scale_a == 0.0 or scale_b == 0.0:
        if zero_policy == ZERO_POLICY_ZERO:
            return 0.0
        raise ZeroVector("Cosine similarity is undefined for a zero vector")

    a = a / scale_a
    b = b / scale_b
    similarity = float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))

    # min/max would silently turn NaN into a bound
    if not np.isfinite(similarity):
        raise InvalidVector("Vector components must be finite")
    return max(-1.0, min(1.0, similarity))


def max_abs(vector: np.ndarray) -> float:
    """Largest absolute component, 0.0 for an empty vector."""
    if vector.size == 0:
        return 0.0
    return float(np.max(np.abs(vector)))


def is_zero_vector(vector: np.ndarray) -> bool:
    return max_abs(vector) == 0.0
