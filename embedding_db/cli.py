"""
Interactive nearest-word lookup.

Seeds a small vocabulary, then reads words from stdin and prints the stored
words closest to each one until the user types an exit word.
"""

import argparse
import sys

from embedding_db.core import config
from embedding_db.core.embedding_service import EmbeddingDB
from embedding_db.core.errors import (
    DimensionMismatch,
    EmbeddingProviderError,
    InvalidVector,
    NotFound,
    ZeroVector,
)
from util.logging import logger

DEFAULT_WORDS = ["maçã", "banana", "laranja", "uva", "morango", "abacaxi"]
EXIT_WORDS = {"sair", "quit", "exit"}

RECOVERABLE_ERRORS = (NotFound, DimensionMismatch, InvalidVector, ZeroVector, EmbeddingProviderError)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="embedding-db",
        description="Find the closest words to a query word using embedding cosine similarity"
    )
    parser.add_argument(
        "--provider",
        choices=config.VALID_PROVIDERS,
        default=None,
        help="Embedding provider (default: EMBED_PROVIDER or openai)"
    )
    parser.add_argument(
        "--dim",
        type=int,
        default=None,
        help="Store dimension (default: the provider's dimension)"
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=config.DEFAULT_TOP_K,
        help=f"Number of closest words to show (default: {config.DEFAULT_TOP_K})"
    )
    parser.add_argument(
        "--exclude-self",
        action="store_true",
        default=config.exclude_self_enabled(),
        help="Leave the query word out of its own results"
    )
    parser.add_argument(
        "--seed",
        nargs="+",
        metavar="WORD",
        default=None,
        help="Words to load before prompting (default: a fruit vocabulary)"
    )
    return parser


def run_loop(db: EmbeddingDB, top_k: int, exclude_self: bool, input_fn=None, output=None) -> None:
    """Prompt for words until an exit word or EOF."""
    input_fn = input_fn or input
    output = output or sys.stdout

    while True:
        try:
            raw = input_fn("Enter a word (or 'sair' to quit): ")
        except EOFError:
            break

        word = raw.strip().lower()
        if word in EXIT_WORDS:
            break
        if not word:
            continue

        try:
            closest = db.find_closest(word, top_k, exclude_self=exclude_self)
        except RECOVERABLE_ERRORS as e:
            print(f"Error: {e}", file=output)
            continue

        print(f"Closest words to '{word}': {', '.join(closest)}\n", file=output)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.top_k < 0:
        print("ERROR: --top-k must be >= 0", file=sys.stderr)
        return 1

    try:
        provider = config.get_embedding_provider(args.provider, dimension=args.dim)
        db = EmbeddingDB(provider, dim=args.dim, zero_vector_policy=config.get_zero_vector_policy())
    except ValueError as e:
        # Missing API key, unknown provider, unsupported dimension, InvalidDimension
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    words = args.seed or DEFAULT_WORDS
    for word in words:
        try:
            db.add_word(word)
        except RECOVERABLE_ERRORS as e:
            # A failed seed word is skipped; the rest of the vocabulary still loads
            print(f"Error adding '{word}': {e}", file=sys.stderr)

    logger.info(f"Loaded {len(db.store)} words (dimension {db.store.dim})")

    run_loop(db, args.top_k, args.exclude_self)
    return 0


if __name__ == "__main__":
    sys.exit(main())
