"""Records - Linhas do banco relacional (leitura) e resultados duráveis."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .enums import QuestionType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Skill:
    skill_id: int
    subject_id: int
    skill_name: str = ""


@dataclass
class Content:
    content_id: int
    skill_id: int
    type: QuestionType
    order: int = 0


@dataclass
class Question:
    """Questão de qualquer tipo do banco.

    ``options`` guarda as alternativas por nome de coluna (``option_1``,
    ``category_a_option_1``...). Study notes não têm ``answer``.
    """

    question_id: int
    type: QuestionType
    content_id: int
    subject_id: int
    question_content: str | None = None
    options: dict[str, str | None] = field(default_factory=dict)
    answer: str | None = None
    feedback: str | None = None
    time_limit: int | None = None


@dataclass
class QuizResultRecord:
    """Resultado agregado de uma sessão finalizada (append-only)."""

    learner_id: int
    subject_id: int
    skill_id: int
    percentage: float
    time_limit: int
    time_used: int
    timestamp: datetime = field(default_factory=utcnow)

    @property
    def display_percentage(self) -> str:
        return f"{self.percentage:.2f}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "learner_id": self.learner_id,
            "subject_id": self.subject_id,
            "skill_id": self.skill_id,
            "percentage": self.percentage,
            "time_limit": self.time_limit,
            "time_used": self.time_used,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class QuestionResultRecord:
    """Resultado de uma resposta individual, independente da sessão."""

    learner_id: int
    subject_id: int
    skill_id: int
    question_id: int
    type: QuestionType
    result: int
    time_used: int | None
    time_limit: int | None
    timestamp: datetime = field(default_factory=utcnow)
