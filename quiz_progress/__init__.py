"""Quiz Progress - Sessões de quiz por skill com correção e resultado final.

Arquitetura:
- core/: Exceções de domínio e logger estruturado
- models/: Enums, Schemas Pydantic, SessionDocument, registros do banco
- storage/: SessionStore (AgentFS KV) e codec do documento tagueado
- bank/: Banco de questões, permissões e resultados (SQLite via apsw)
- engine/: Montagem, correção, finalização e lock de resposta
- router.py: FastAPI endpoints
"""

from .bank import SQLiteBank
from .engine import (
    AnswerGradingEngine,
    AnswerLockGuard,
    ProgressEngine,
    QuizAssemblyEngine,
    SessionFinalizationEngine,
)
from .models import QuestionType, SessionDocument, SessionKey
from .storage import SessionStore

__all__ = [
    # Models
    "QuestionType",
    "SessionKey",
    "SessionDocument",
    # Engines
    "QuizAssemblyEngine",
    "AnswerGradingEngine",
    "SessionFinalizationEngine",
    "AnswerLockGuard",
    "ProgressEngine",
    # Storage
    "SessionStore",
    "SQLiteBank",
]
