"""Core - Logging e exceções compartilhadas."""

from .exceptions import (
    AnswerLocked,
    NotFound,
    PermissionDenied,
    ProgressError,
    SessionNotFound,
    TransientStoreError,
    Unauthorized,
    UnsupportedQuestionType,
    ValidationError,
)
from .logger import get_logger

__all__ = [
    "ProgressError",
    "NotFound",
    "SessionNotFound",
    "PermissionDenied",
    "ValidationError",
    "AnswerLocked",
    "UnsupportedQuestionType",
    "Unauthorized",
    "TransientStoreError",
    "get_logger",
]
