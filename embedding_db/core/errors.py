"""
Error taxonomy for the embedding store and its collaborators.
All errors are returned to the immediate caller; nothing here logs or exits.
"""


class VectorStoreError(Exception):
    """Base exception for vector store operations."""
    pass


class InvalidDimension(VectorStoreError, ValueError):
    """Raised when a store is created with a non-positive dimension."""

    def __init__(self, dim):
        self.dim = dim
        super().__init__(f"Invalid dimension {dim!r}: must be a positive integer")


class DimensionMismatch(VectorStoreError, ValueError):
    """Raised when a vector's length does not match the expected dimension."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Vector dimension {actual} does not match expected dimension {expected}")


class InvalidVector(VectorStoreError, ValueError):
    """Raised when a vector contains NaN or infinite components."""
    pass


class NotFound(VectorStoreError, LookupError):
    """Raised when a label is not present in the store."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Label not found: {label!r}")


class ZeroVector(VectorStoreError, ValueError):
    """Raised when cosine similarity is requested for a zero-norm vector."""
    pass


class EmbeddingProviderError(VectorStoreError, RuntimeError):
    """Raised when an embedding provider fails to produce a vector."""
    pass
