"""Session State - Documento de sessão em andamento."""

from dataclasses import dataclass, field
from typing import Iterator

from .enums import QuestionType


@dataclass(frozen=True)
class SessionKey:
    """Identificador composto (learner, skill) de uma sessão.

    Serializado como ``"{learner_id}_{skill_id}"``. Existe no máximo uma
    sessão ativa por par.
    """

    learner_id: int
    skill_id: int

    def __str__(self) -> str:
        return f"{self.learner_id}_{self.skill_id}"


@dataclass
class QuestionAttempt:
    """Estado de uma questão dentro da sessão.

    Attributes:
        type: Tipo da questão (tabela de origem)
        question_id: ID da questão no banco
        result: 0/1 após correção, None enquanto não corrigida
        time_limit: Limite em segundos copiado do banco
        time_used: Tempo gasto em segundos, informado na correção
    """

    type: QuestionType
    question_id: int
    result: int | None = None
    time_limit: int | None = None
    time_used: int | None = None

    @property
    def identity(self) -> tuple[QuestionType, int]:
        return self.type, self.question_id


@dataclass
class SessionDocument:
    """Sequência ordenada de tentativas; a ordem é a ordem de exibição."""

    attempts: list[QuestionAttempt] = field(default_factory=list)

    def __iter__(self) -> Iterator[QuestionAttempt]:
        return iter(self.attempts)

    def __len__(self) -> int:
        return len(self.attempts)

    def find(self, question_type: QuestionType, question_id: int) -> QuestionAttempt | None:
        for attempt in self.attempts:
            if attempt.identity == (question_type, question_id):
                return attempt
        return None

    def references(self, question_type: QuestionType, question_id: int) -> bool:
        return self.find(question_type, question_id) is not None

    def upsert(self, attempt: QuestionAttempt) -> None:
        """Substitui a tentativa com mesmo (type, question_id) ou anexa no fim."""
        for i, current in enumerate(self.attempts):
            if current.identity == attempt.identity:
                self.attempts[i] = attempt
                return
        self.attempts.append(attempt)
