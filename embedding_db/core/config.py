"""
Runtime configuration for the embedding store, read from environment variables.
"""

import os

# Embedding provider configuration
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "openai")  # openai|hash|local
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "text-embedding-ada-002")
EMBED_DIMENSION = int(os.getenv("EMBED_DIMENSION", "1536"))  # ada-002 returns 1536 dimensions
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
EMBED_TIMEOUT_SEC = float(os.getenv("EMBED_TIMEOUT_SEC", "30"))
LOCAL_MODEL_NAME = os.getenv("LOCAL_MODEL_NAME", "all-mpnet-base-v2")  # sentence-transformers model for provider=local

# Search configuration
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "5"))
ZERO_VECTOR_POLICY = os.getenv("ZERO_VECTOR_POLICY", "raise")  # raise|zero

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

VERSION = "0.1.0"

VALID_PROVIDERS = ["openai", "hash", "local"]
VALID_ZERO_POLICIES = ["raise", "zero"]


def get_api_key():
    """Get the embedding API key. Read on every call so tests can patch the environment."""
    return os.getenv("EMBEDDING_DB_API_KEY") or os.getenv("API_KEY")


def get_embed_provider_name():
    """Get configured embedding provider name (openai|hash|local)."""
    return os.getenv("EMBED_PROVIDER", EMBED_PROVIDER).lower()


def get_zero_vector_policy():
    """Get zero-norm similarity policy (raise|zero)."""
    return os.getenv("ZERO_VECTOR_POLICY", ZERO_VECTOR_POLICY).lower()


def exclude_self_enabled():
    """Check if search should skip the query label itself by default."""
    return os.getenv("EXCLUDE_SELF", "false").lower() == "true"


def get_vector_store(dim: int = None):
    """Get a configured in-memory vector store."""
    from embedding_db.vector.index import VectorStore
    return VectorStore(dim if dim is not None else EMBED_DIMENSION,
                       zero_vector_policy=get_zero_vector_policy())


def get_embedding_provider(provider: str = None, dimension: int = None):
    """Get configured embedding provider implementation.

    dimension overrides EMBED_DIMENSION for the openai and hash providers.
    The openai provider uses the model's native size unless a dimension is
    passed or EMBED_DIMENSION is set.

    Raises:
        ValueError: if the provider name is unknown, the OpenAI provider
            is selected without an API key, or the OpenAI model cannot
            produce the requested dimension.
    """
    name = (provider or get_embed_provider_name()).lower()

    if name == "openai":
        api_key = get_api_key()
        if not api_key:
            raise ValueError("EMBEDDING_DB_API_KEY is not set")
        if dimension is None and os.getenv("EMBED_DIMENSION"):
            dimension = EMBED_DIMENSION
        from embedding_db.vector.embeddings import OpenAIEmbedding
        return OpenAIEmbedding(
            api_key=api_key,
            model=EMBED_MODEL_NAME,
            dimension=dimension,
            base_url=OPENAI_BASE_URL,
            timeout=EMBED_TIMEOUT_SEC,
        )

    dimension = dimension if dimension is not None else EMBED_DIMENSION
    if name == "hash":
        from embedding_db.vector.embeddings import DeterministicHashEmbedding
        return DeterministicHashEmbedding(dimension=dimension)
    elif name == "local":
        from embedding_db.vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(LOCAL_MODEL_NAME)
    else:
        raise ValueError(f"Unknown EMBED_PROVIDER: {name}")


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    provider = get_embed_provider_name()
    if provider not in VALID_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {provider}")

    if provider == "openai" and not get_api_key():
        issues.append("EMBED_PROVIDER=openai requires EMBEDDING_DB_API_KEY")

    if get_zero_vector_policy() not in VALID_ZERO_POLICIES:
        issues.append(f"Invalid ZERO_VECTOR_POLICY: {get_zero_vector_policy()}")

    if EMBED_DIMENSION < 1:
        issues.append("EMBED_DIMENSION must be >= 1")

    if DEFAULT_TOP_K < 0:
        issues.append("DEFAULT_TOP_K must be >= 0")

    return issues
