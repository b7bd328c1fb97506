"""Collaborators - Interfaces do banco de questões, permissões e resultados."""

from abc import ABC, abstractmethod

from ..models.enums import QuestionType
from ..models.records import (
    Content,
    Question,
    QuestionResultRecord,
    QuizResultRecord,
    Skill,
)


class QuestionBank(ABC):
    """Banco de questões relacional (uma tabela por tipo)."""

    @abstractmethod
    def get_skill(self, skill_id: int) -> Skill | None:
        """Busca skill pelo ID."""

    @abstractmethod
    def list_published_content(self, skill_id: int) -> list[Content]:
        """Conteúdos ativos e publicados da skill, ordenados por (order, content_id)."""

    @abstractmethod
    def list_published_questions(
        self, question_type: QuestionType, content_id: int
    ) -> list[Question]:
        """Questões ativas e publicadas do conteúdo na tabela do tipo."""

    @abstractmethod
    def get_question(self, question_type: QuestionType, question_id: int) -> Question | None:
        """Busca questão pelo ID na tabela do tipo (qualquer status)."""

    @abstractmethod
    def update_answer(self, question_type: QuestionType, question_id: int, answer: str) -> None:
        """Altera a resposta oficial da questão."""


class PermissionService(ABC):
    @abstractmethod
    def has_access(self, learner_id: int, subject_id: int) -> bool:
        """True se o aluno tem membership no subject."""


class ResultSink(ABC):
    """Destino append-only dos resultados duráveis."""

    @abstractmethod
    def save_quiz_result(self, record: QuizResultRecord) -> None: ...

    @abstractmethod
    def save_question_result(self, record: QuestionResultRecord) -> None: ...
