"""
Word-level embedding database: embeds words through a provider and answers
nearest-word queries against an in-memory vector store.
"""

from typing import Iterable, List, Optional

from .errors import VectorStoreError
from embedding_db.vector.embeddings import IEmbeddingProvider
from embedding_db.vector.index import IVectorStore, VectorStore
from util.logging import logger


class EmbeddingDB:
    """
    Composes an embedding provider with a vector store.

    Provider calls happen before vectors reach the store, so the store itself
    never performs I/O.
    """

    def __init__(self, provider: IEmbeddingProvider, dim: Optional[int] = None,
                 store: Optional[IVectorStore] = None, zero_vector_policy: str = "raise"):
        """
        Args:
            provider: Source of vectors for words
            dim: Store dimension, defaults to the provider's dimension
            store: Existing store to use instead of creating one
            zero_vector_policy: Passed to a newly created store
        """
        self.provider = provider
        if store is None:
            store = VectorStore(dim if dim is not None else provider.get_dimension(),
                                zero_vector_policy=zero_vector_policy)
        self.store = store

    def __contains__(self, word: str) -> bool:
        return word in self.store

    def add_word(self, word: str) -> None:
        """
        Embed word and insert it, replacing any existing vector.

        Raises:
            EmbeddingProviderError: if the provider fails
            DimensionMismatch: if the provider returns a vector of the wrong length
        """
        try:
            vector = self.provider.embed_text(word)
            self.store.insert(word, vector)
        except VectorStoreError as e:
            logger.log_vector_operation("insert", word, {"error": str(e)}, status="failed")
            raise

        logger.log_vector_operation("insert", word, {"dimension": len(vector)})

    def add_words(self, words: Iterable[str]) -> int:
        """Embed and insert each word. Returns the number added."""
        count = 0
        for word in words:
            self.add_word(word)
            count += 1
        return count

    def find_closest(self, word: str, n: int = 5, exclude_self: bool = False) -> List[str]:
        """
        Return up to n stored words closest to word, best first.

        An unknown word is embedded and inserted before searching.
        """
        if word not in self:
            self.add_word(word)

        try:
            results = self.store.search(word, n, exclude_self=exclude_self)
        except VectorStoreError as e:
            logger.log_vector_operation("search", word, {"error": str(e)}, status="failed")
            raise

        logger.log_vector_operation("search", word, {
            "k": n,
            "exclude_self": exclude_self,
            "results": len(results),
        })
        return [result.label for result in results]
