"""
In-memory labeled vector store with exact cosine top-k search.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Set, Tuple, Union
import numpy as np

from embedding_db.core.errors import InvalidDimension, NotFound, ZeroVector
from .similarity import ZERO_POLICIES, ZERO_POLICY_RAISE, as_vector, cosine_similarity, is_zero_vector
from .topk import TopK
from .types import ScoredLabel, VectorLike

Query = Union[str, VectorLike]


class IVectorStore(ABC):
    """Abstract interface for labeled vector storage and nearest-neighbour search."""

    @abstractmethod
    def insert(self, label: str, vector: VectorLike) -> None:
        """Store vector under label, replacing any previous vector."""
        pass

    @abstractmethod
    def get(self, label: str) -> np.ndarray:
        """Return the vector stored under label."""
        pass

    @abstractmethod
    def labels(self) -> Set[str]:
        """Return all stored labels."""
        pass

    @abstractmethod
    def search(self, query: Query, k: int = 5, exclude_self: bool = False) -> List[ScoredLabel]:
        """Return the k most similar entries, best first."""
        pass

    def __contains__(self, label: object) -> bool:
        return label in self.labels()

    def find_closest(self, query: Query, k: int = 5, exclude_self: bool = False) -> List[str]:
        """Return the labels of the k most similar entries, best first."""
        return [result.label for result in self.search(query, k, exclude_self)]


class VectorStore(IVectorStore):
    """Exact in-memory store. Every search scans all entries.

    Not safe for concurrent mutation; callers serialize access.
    """

    def __init__(self, dim: int, zero_vector_policy: str = ZERO_POLICY_RAISE):
        """
        Args:
            dim: Length every stored vector must have
            zero_vector_policy: "raise" to reject zero vectors on insert and
                as queries, "zero" to store them and score them 0.0

        Raises:
            InvalidDimension: if dim is not a positive integer
        """
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim <= 0:
            raise InvalidDimension(dim)
        if zero_vector_policy not in ZERO_POLICIES:
            raise ValueError(f"Unknown zero-vector policy: {zero_vector_policy}")

        self.dim = int(dim)
        self.zero_vector_policy = zero_vector_policy
        self._entries: Dict[str, np.ndarray] = {}  # label -> read-only float64 vector

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, label: object) -> bool:
        return label in self._entries

    def insert(self, label: str, vector: VectorLike) -> None:
        """Store vector under label (last write wins).

        The vector is validated before anything is stored, so a failed insert
        leaves the store unchanged.

        Raises:
            DimensionMismatch: if len(vector) != dim
            InvalidVector: if vector has NaN/infinite components
            ZeroVector: if vector is all zeros under the "raise" policy
        """
        vector = as_vector(vector, self.dim)
        # A stored zero vector would make every later search raise
        if self.zero_vector_policy == ZERO_POLICY_RAISE and is_zero_vector(vector):
            raise ZeroVector(f"Cannot store zero vector for label {label!r}")
        self._entries[label] = vector

    def insert_many(self, items: Iterable[Tuple[str, VectorLike]]) -> None:
        """Insert (label, vector) pairs in order. Stops at the first invalid vector."""
        for label, vector in items:
            self.insert(label, vector)

    def get(self, label: str) -> np.ndarray:
        """Raises NotFound if label was never inserted."""
        try:
            return self._entries[label]
        except KeyError:
            raise NotFound(label) from None

    def labels(self) -> Set[str]:
        return set(self._entries)

    def items(self) -> Iterator[Tuple[str, np.ndarray]]:
        return iter(self._entries.items())

    def resolve_query(self, query: Query) -> np.ndarray:
        """Turn a label or raw vector into a validated query vector."""
        if isinstance(query, str):
            return self.get(query)
        return as_vector(query, self.dim)

    def search(self, query: Query, k: int = 5, exclude_self: bool = False) -> List[ScoredLabel]:
        """
        Score every stored vector against query and keep the k best.

        Args:
            query: A stored label or a raw vector of length dim
            k: Number of results wanted; fewer are returned if the store is smaller
            exclude_self: When query is a label, leave that label out of the results

        Returns:
            ScoredLabels ordered by score descending, then label ascending

        Raises:
            NotFound: if query is a label that is not stored
            DimensionMismatch: if query is a vector of the wrong length
            ZeroVector: if a zero-norm vector is compared under the "raise" policy
        """
        collector = TopK(k)
        query_vector = self.resolve_query(query)
        skip_label = query if exclude_self and isinstance(query, str) else None

        for label, vector in self._entries.items():
            if label == skip_label:
                continue
            score = cosine_similarity(query_vector, vector, self.zero_vector_policy)
            collector.push(label, score)

        return collector.results()
