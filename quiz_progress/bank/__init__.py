"""Progress Bank - Colaboradores externos (banco de questões, permissões, resultados)."""

from .base import PermissionService, QuestionBank, ResultSink
from .sqlite_bank import QUESTION_TABLES, SQLiteBank

__all__ = [
    "QuestionBank",
    "PermissionService",
    "ResultSink",
    "SQLiteBank",
    "QUESTION_TABLES",
]
