"""
Value types shared by the vector store and top-k search.
"""

from typing import Sequence, Union
from dataclasses import dataclass
import numpy as np

# Anything that can be coerced to a 1-D float64 array
VectorLike = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class ScoredLabel:
    """A label paired with its similarity to a query. Produced only during search."""

    label: str
    """Label of the stored vector"""

    score: float
    """Cosine similarity to the query (-1 to 1)"""
