"""Progress Models - Enums, Schemas e State."""

from .enums import PublishedStatus, QuestionType, RecordStatus
from .records import (
    Content,
    Question,
    QuestionResultRecord,
    QuizResultRecord,
    Skill,
)
from .schemas import (
    AbandonSessionResponse,
    AnswerEditRequest,
    AnswerEditResponse,
    AnswerLockResponse,
    GradeAnswerRequest,
    GradeAnswerResponse,
    GradeResult,
    QuizResultResponse,
    SessionItem,
    SubmitResultsRequest,
    SubmitResultsResponse,
)
from .state import QuestionAttempt, SessionDocument, SessionKey

__all__ = [
    # Enums
    "QuestionType",
    "RecordStatus",
    "PublishedStatus",
    # State
    "SessionKey",
    "QuestionAttempt",
    "SessionDocument",
    # Records
    "Skill",
    "Content",
    "Question",
    "QuizResultRecord",
    "QuestionResultRecord",
    # Schemas
    "SessionItem",
    "GradeAnswerRequest",
    "GradeResult",
    "GradeAnswerResponse",
    "SubmitResultsRequest",
    "QuizResultResponse",
    "SubmitResultsResponse",
    "AbandonSessionResponse",
    "AnswerEditRequest",
    "AnswerEditResponse",
    "AnswerLockResponse",
]
