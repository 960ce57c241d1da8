"""
Word embedding database - provider-backed inserts and nearest-word queries.
"""

import pytest
import numpy as np
from unittest.mock import MagicMock
from embedding_db.core.embedding_service import EmbeddingDB
from embedding_db.core.errors import DimensionMismatch, EmbeddingProviderError, NotFound
from embedding_db.vector.embeddings import DeterministicHashEmbedding
from embedding_db.vector.index import VectorStore


FRUIT_VECTORS = {
    "banana": [1.0, 0.0, 0.0],
    "plantain": [0.9, 0.1, 0.0],
    "apple": [0.0, 1.0, 0.0],
    "pear": [0.1, 0.9, 0.0],
    "car": [0.0, 0.0, 1.0],
}


@pytest.fixture
def mock_embedding_provider():
    """Mock embedding provider returning fixed vectors for known words."""
    embedder = MagicMock()
    embedder.get_dimension.return_value = 3
    embedder.embed_text.side_effect = lambda text: FRUIT_VECTORS[text]
    return embedder


@pytest.fixture
def fruit_db(mock_embedding_provider):
    db = EmbeddingDB(mock_embedding_provider)
    db.add_words(FRUIT_VECTORS)
    return db


def test_dimension_defaults_to_provider(mock_embedding_provider):
    """Test that the store dimension comes from the provider."""
    db = EmbeddingDB(mock_embedding_provider)
    assert db.store.dim == 3


def test_add_word(mock_embedding_provider):
    """Test that add_word embeds and stores the word."""
    db = EmbeddingDB(mock_embedding_provider)
    db.add_word("apple")

    assert "apple" in db
    np.testing.assert_array_equal(db.store.get("apple"), [0.0, 1.0, 0.0])
    mock_embedding_provider.embed_text.assert_called_once_with("apple")


def test_add_words_returns_count(mock_embedding_provider):
    """Test that add_words reports how many words were added."""
    db = EmbeddingDB(mock_embedding_provider)
    assert db.add_words(["apple", "pear"]) == 2
    assert db.store.labels() == {"apple", "pear"}


def test_find_closest(fruit_db):
    """Test that nearest words come back best first, including the word itself."""
    assert fruit_db.find_closest("banana", 2) == ["banana", "plantain"]


def test_find_closest_exclude_self(fruit_db):
    """Test that exclude_self leaves the query word out."""
    assert fruit_db.find_closest("banana", 2, exclude_self=True) == ["plantain", "pear"]


def test_find_closest_embeds_unknown_word(mock_embedding_provider):
    """Test that an unknown query word is embedded and stored before searching."""
    db = EmbeddingDB(mock_embedding_provider)
    db.add_word("apple")

    assert db.find_closest("pear", 5) == ["pear", "apple"]
    assert "pear" in db


def test_find_closest_does_not_reembed_known_word(fruit_db, mock_embedding_provider):
    """Test that a stored word is not sent to the provider again."""
    calls_before = mock_embedding_provider.embed_text.call_count
    fruit_db.find_closest("apple", 3)
    assert mock_embedding_provider.embed_text.call_count == calls_before


def test_provider_failure_propagates(mock_embedding_provider):
    """Test that provider errors reach the caller and nothing is stored."""
    mock_embedding_provider.embed_text.side_effect = EmbeddingProviderError("HTTP 500")
    db = EmbeddingDB(mock_embedding_provider)

    with pytest.raises(EmbeddingProviderError):
        db.add_word("apple")
    assert len(db.store) == 0


def test_provider_dimension_mismatch_propagates(mock_embedding_provider):
    """Test that a provider returning the wrong length is rejected."""
    mock_embedding_provider.embed_text.side_effect = lambda text: [1.0, 0.0]
    db = EmbeddingDB(mock_embedding_provider)

    with pytest.raises(DimensionMismatch):
        db.add_word("apple")
    assert "apple" not in db


def test_uses_supplied_store(mock_embedding_provider):
    """Test that an existing store is used as-is."""
    store = VectorStore(3)
    store.insert("car", [0.0, 0.0, 1.0])
    db = EmbeddingDB(mock_embedding_provider, store=store)

    assert db.store is store
    assert db.find_closest("car", 1) == ["car"]


def test_search_error_propagates(mock_embedding_provider):
    """Test that search failures from the store are re-raised."""
    store = MagicMock()
    store.__contains__.return_value = True
    store.search.side_effect = NotFound("ghost")
    db = EmbeddingDB(mock_embedding_provider, store=store)

    with pytest.raises(NotFound):
        db.find_closest("ghost", 3)


def test_with_hash_provider():
    """Test the service end to end with deterministic hash embeddings."""
    db = EmbeddingDB(DeterministicHashEmbedding(dimension=64))
    words = ["maçã", "banana", "laranja", "uva", "morango", "abacaxi"]
    db.add_words(words)

    results = db.find_closest("uva", 5)
    assert len(results) == 5
    assert results[0] == "uva"
    assert set(results) <= set(words)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
