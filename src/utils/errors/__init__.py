"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    HttpError,
    NetworkError,
    SessionClientError,
    ValidationError,
)

__all__ = [
    "HttpError",
    "NetworkError",
    "SessionClientError",
    "ValidationError",
]
