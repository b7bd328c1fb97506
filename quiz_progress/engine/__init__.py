"""Progress Engines - Lógica de negócios."""

from .answer_lock import AnswerLockGuard, QuestionAnswerEditor
from .assembly_engine import QuizAssemblyEngine
from .finalization_engine import SessionFinalizationEngine, SessionSummary, aggregate
from .grading_engine import AnswerGradingEngine, GRADERS
from .progress_engine import ProgressEngine

__all__ = [
    "QuizAssemblyEngine",
    "AnswerGradingEngine",
    "GRADERS",
    "SessionFinalizationEngine",
    "SessionSummary",
    "aggregate",
    "AnswerLockGuard",
    "QuestionAnswerEditor",
    "ProgressEngine",
]
