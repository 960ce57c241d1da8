"""
Structured logging for the embedding store's service and provider layers.
The vector core itself never logs; errors surface to callers instead.
"""

import logging
import os
from typing import Any, Dict

class StructuredLogger:
    """Structured logger for vector store and embedding operations."""

    def __init__(self, name: str = "embedding_db"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status == "failed":
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def log_vector_operation(self, operation: str, label: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector store operation."""
        log_details = {"label": label}
        if details:
            log_details.update(details)

        self.log_operation(f"vector.{operation}", status, log_details)

    def log_embedding_request(self, model: str, text: str, status: str = "success", details: Dict[str, Any] = None):
        """Log an embedding provider call. Input text is truncated."""
        log_details = {
            "model": model,
            "text": text[:50] + "..." if len(text) > 50 else text
        }
        if details:
            log_details.update(details)

        self.log_operation("embedding.request", status, log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
