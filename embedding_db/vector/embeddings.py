"""
Embedding providers: turn a text label into a vector for the store.
"""

from abc import ABC, abstractmethod
import hashlib
import struct
from typing import List, Optional

import requests

from embedding_db.core.errors import EmbeddingProviderError
from util.logging import logger


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for offline use and testing.

    Each block of four components comes from SHA-256 over the text and a block
    counter, so every dimension is populated and identical text always maps
    to the identical vector.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension

    def embed_text(self, text: str) -> List[float]:
        """Generate deterministic embedding vector using hash function."""
        data = text.encode("utf-8")
        vector: List[float] = []
        counter = 0
        while len(vector) < self.dimension:
            digest = hashlib.sha256(data + struct.pack(">I", counter)).digest()
            for (value,) in struct.iter_unpack(">Q", digest):
                # Map the 64-bit integer onto [-1, 1)
                vector.append((value / 2**64) * 2 - 1)
            counter += 1
        return vector[:self.dimension]

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


# Native output size of known OpenAI embedding models
OPENAI_MODEL_DIMENSIONS = {
    "text-embedding-ada-002": 1536,
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
}

# Models that reject the "dimensions" request field
OPENAI_FIXED_DIMENSION_MODELS = {"text-embedding-ada-002"}


class OpenAIEmbedding(IEmbeddingProvider):
    """Embedding provider backed by the OpenAI /embeddings HTTP endpoint."""

    def __init__(self, api_key: str, model: str = "text-embedding-ada-002",
                 dimension: Optional[int] = None, base_url: str = "https://api.openai.com/v1",
                 user: Optional[str] = None, timeout: float = 30,
                 session: Optional[requests.Session] = None):
        """
        Args:
            api_key: Bearer token for the API
            model: Embedding model identifier
            dimension: Length of returned vectors. Defaults to the model's
                native size; any other size is requested from the API via
                the "dimensions" field
            base_url: API root, without the /embeddings suffix
            user: Optional end-user identifier forwarded to the API
            timeout: Request timeout in seconds
            session: Optional requests session, mainly for connection reuse

        Raises:
            ValueError: if the model cannot produce the requested dimension
        """
        native = OPENAI_MODEL_DIMENSIONS.get(model)
        if dimension is None:
            dimension = native or 1536
        if model in OPENAI_FIXED_DIMENSION_MODELS and dimension != native:
            raise ValueError(
                f"Model {model} only produces {native}-dimensional embeddings, got dimension {dimension}"
            )

        self.api_key = api_key
        self.model = model
        self.dimension = dimension
        # Only ask for a size when it differs from what the model returns anyway
        self.request_dimensions = dimension if native is not None and dimension != native else None
        self.base_url = base_url.rstrip("/")
        self.user = user
        self.timeout = timeout
        self._http = session or requests

    @property
    def url(self) -> str:
        return f"{self.base_url}/embeddings"

    def _build_payload(self, text: str) -> dict:
        payload = {"model": self.model, "input": text}
        if self.request_dimensions is not None:
            payload["dimensions"] = self.request_dimensions
        if self.user:
            payload["user"] = self.user
        return payload

    def embed_text(self, text: str) -> List[float]:
        """
        Request an embedding for text.

        Raises:
            EmbeddingProviderError: on transport failure, non-200 status or
                a response body without an embedding
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            response = self._http.post(self.url, json=self._build_payload(text),
                                       headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.log_embedding_request(self.model, text, "failed", {"error": str(e)})
            raise EmbeddingProviderError(f"Embedding request failed: {e}") from e

        if response.status_code != 200:
            logger.log_embedding_request(self.model, text, "failed",
                                         {"status_code": response.status_code})
            raise EmbeddingProviderError(
                f"Failed to create embedding: HTTP {response.status_code} {response.reason}"
            )

        try:
            body = response.json()
            embedding = body["data"][0]["embedding"]
            vector = [float(value) for value in embedding]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.log_embedding_request(self.model, text, "failed", {"error": "malformed response"})
            raise EmbeddingProviderError(f"Malformed embedding response: {e}") from e

        logger.log_embedding_request(self.model, text, "success",
                                     {"dimension": len(vector), "usage": body.get("usage")})
        return vector

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Local sentence-transformers embedding provider.

    Requires the optional ``local`` extra. The model is loaded on first use.
    """

    def __init__(self, model_name: str = "all-mpnet-base-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError as e:
                raise EmbeddingProviderError(
                    "sentence-transformers not installed. Install with: pip install embedding-db[local]"
                ) from e
            logger.info(f"Loading sentence-transformer model: {self.model_name}")
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector using sentence transformers."""
        embedding = self.model.encode(text, convert_to_tensor=False)
        return [float(value) for value in embedding]

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension
