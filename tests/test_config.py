"""
Environment-driven configuration and factories.
"""

import pytest
from embedding_db.core import config
from embedding_db.vector.embeddings import DeterministicHashEmbedding, OpenAIEmbedding, SentenceTransformerEmbedding
from embedding_db.vector.index import VectorStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without embedding-related environment variables."""
    for name in ("EMBEDDING_DB_API_KEY", "API_KEY", "EMBED_PROVIDER", "ZERO_VECTOR_POLICY", "EXCLUDE_SELF",
                 "EMBED_DIMENSION"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    """Test default configuration values."""
    assert config.EMBED_MODEL_NAME == "text-embedding-ada-002"
    assert config.EMBED_DIMENSION == 1536
    assert config.get_embed_provider_name() == "openai"
    assert config.get_zero_vector_policy() == "raise"
    assert config.exclude_self_enabled() is False


def test_api_key_fallback(monkeypatch):
    """Test that API_KEY is used when EMBEDDING_DB_API_KEY is unset."""
    assert config.get_api_key() is None

    monkeypatch.setenv("API_KEY", "legacy")
    assert config.get_api_key() == "legacy"

    monkeypatch.setenv("EMBEDDING_DB_API_KEY", "preferred")
    assert config.get_api_key() == "preferred"


def test_openai_provider_requires_key():
    """Test that the OpenAI provider cannot be built without a key."""
    with pytest.raises(ValueError, match="EMBEDDING_DB_API_KEY"):
        config.get_embedding_provider("openai")


def test_openai_provider(monkeypatch):
    """Test that the OpenAI provider is configured from the environment."""
    monkeypatch.setenv("EMBEDDING_DB_API_KEY", "sk-test")
    provider = config.get_embedding_provider()

    assert isinstance(provider, OpenAIEmbedding)
    assert provider.api_key == "sk-test"
    assert provider.model == config.EMBED_MODEL_NAME
    assert provider.get_dimension() == config.EMBED_DIMENSION


def test_openai_provider_rejects_unsupported_dimension(monkeypatch):
    """Test that ada-002 cannot be built for a size it never returns."""
    monkeypatch.setenv("EMBEDDING_DB_API_KEY", "sk-test")
    monkeypatch.setattr(config, "EMBED_MODEL_NAME", "text-embedding-ada-002")

    with pytest.raises(ValueError, match="1536"):
        config.get_embedding_provider("openai", dimension=256)


def test_openai_provider_forwards_dimension(monkeypatch):
    """Test that a requested dimension reaches the request payload for text-embedding-3 models."""
    monkeypatch.setenv("EMBEDDING_DB_API_KEY", "sk-test")
    monkeypatch.setattr(config, "EMBED_MODEL_NAME", "text-embedding-3-small")

    provider = config.get_embedding_provider("openai", dimension=256)
    assert provider.get_dimension() == 256
    assert provider._build_payload("uva")["dimensions"] == 256

    native = config.get_embedding_provider("openai")
    assert native.get_dimension() == 1536
    assert "dimensions" not in native._build_payload("uva")


def test_hash_provider(monkeypatch):
    """Test selecting the hash provider through EMBED_PROVIDER."""
    monkeypatch.setenv("EMBED_PROVIDER", "hash")
    assert isinstance(config.get_embedding_provider(), DeterministicHashEmbedding)


def test_local_provider():
    """Test selecting the sentence-transformers provider."""
    provider = config.get_embedding_provider("local")
    assert isinstance(provider, SentenceTransformerEmbedding)
    assert provider.model_name == config.LOCAL_MODEL_NAME


def test_unknown_provider():
    """Test that an unknown provider name is rejected."""
    with pytest.raises(ValueError):
        config.get_embedding_provider("word2vec")


def test_get_vector_store(monkeypatch):
    """Test that the store factory applies dimension and zero-vector policy."""
    monkeypatch.setenv("ZERO_VECTOR_POLICY", "zero")
    store = config.get_vector_store(8)

    assert isinstance(store, VectorStore)
    assert store.dim == 8
    assert store.zero_vector_policy == "zero"
    assert config.get_vector_store().dim == config.EMBED_DIMENSION


def test_exclude_self_flag(monkeypatch):
    """Test reading EXCLUDE_SELF."""
    monkeypatch.setenv("EXCLUDE_SELF", "TRUE")
    assert config.exclude_self_enabled() is True


def test_validate_config(monkeypatch):
    """Test that configuration problems are reported."""
    issues = config.validate_config()
    assert "EMBED_PROVIDER=openai requires EMBEDDING_DB_API_KEY" in issues

    monkeypatch.setenv("EMBEDDING_DB_API_KEY", "sk-test")
    assert config.validate_config() == []

    monkeypatch.setenv("ZERO_VECTOR_POLICY", "nan")
    monkeypatch.setenv("EMBED_PROVIDER", "word2vec")
    issues = config.validate_config()
    assert "Invalid ZERO_VECTOR_POLICY: nan" in issues
    assert "Invalid EMBED_PROVIDER: word2vec" in issues


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
