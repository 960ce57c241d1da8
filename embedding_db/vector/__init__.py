"""
Vector core - in-memory labeled vectors with exact cosine top-k search.
"""

# Package initialization for vector module
from .index import IVectorStore, VectorStore
from .similarity import cosine_similarity
from .topk import TopK, top_k
from .types import ScoredLabel
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, OpenAIEmbedding, SentenceTransformerEmbedding

__all__ = [
    'IVectorStore',
    'VectorStore',
    'cosine_similarity',
    'TopK',
    'top_k',
    'ScoredLabel',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'OpenAIEmbedding',
    'SentenceTransformerEmbedding'
]
