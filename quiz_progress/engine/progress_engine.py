"""Progress Engine - Fachada que orquestra os engines da sessão."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

from ..bank.sqlite_bank import SQLiteBank
from ..core.exceptions import NotFound, SessionNotFound
from ..core.logger import get_logger
from ..models.enums import QuestionType
from ..models.records import Question, QuizResultRecord
from ..models.schemas import GradeResult, SessionItem
from ..models.state import SessionKey
from ..storage.session_store import SessionStore
from .answer_lock import AnswerLockGuard, QuestionAnswerEditor
from .assembly_engine import QuizAssemblyEngine
from .finalization_engine import SessionFinalizationEngine
from .grading_engine import AnswerGradingEngine

logger = get_logger("progress_engine")


class ProgressEngine:
    """Ponto de entrada das operações de sessão.

    Operações:
        - start_session: monta e grava sessão nova
        - get_session_status: sessão em andamento com detalhes das questões
        - grade_answer: corrige resposta e atualiza a sessão
        - finalize_session: agrega, persiste resultado e remove a sessão
        - abandon_session: remove a sessão sem resultado
        - can_edit_answer / update_answer: lock de resposta oficial

    Example:
        >>> engine = ProgressEngine(agentfs, bank)
        >>> items = await engine.start_session(learner_id=3489, skill_id=11)
    """

    def __init__(
        self,
        agentfs: AgentFS,
        bank: SQLiteBank,
        key_prefix: str | None = None,
        rng: random.Random | None = None,
    ):
        self.bank = bank
        self.store = SessionStore(agentfs, key_prefix=key_prefix)
        self.assembly = QuizAssemblyEngine(self.store, bank, bank, rng=rng)
        self.grading = AnswerGradingEngine(self.store, bank, bank)
        self.finalization = SessionFinalizationEngine(self.store, bank)
        self.guard = AnswerLockGuard(self.store)
        self.editor = QuestionAnswerEditor(bank, self.guard)

    async def start_session(self, learner_id: int, skill_id: int) -> list[SessionItem]:
        display, _ = await self.assembly.assemble(learner_id, skill_id)
        return display

    async def get_session_status(self, learner_id: int, skill_id: int) -> list[SessionItem]:
        """Retorna as questões da sessão na ordem gravada, com resultados.

        Tentativas cuja questão não existe mais no banco são omitidas.

        Raises:
            SessionNotFound: nenhuma sessão em andamento
        """
        key = SessionKey(learner_id=learner_id, skill_id=skill_id)
        document = await self.store.get(key)
        if document is None:
            raise SessionNotFound("Resources does not exist")

        items = []
        for attempt in document:
            question = self.bank.get_question(attempt.type, attempt.question_id)
            if question is None:
                logger.warning(
                    "Questão da sessão removida do banco",
                    key=str(key),
                    question_id=attempt.question_id,
                )
                continue

            item = self.assembly.build_display_item(question)
            item.result = attempt.result
            if attempt.type != QuestionType.STUDY_NOTE:
                item.time_used = attempt.time_used
            items.append(item)
        return items

    async def grade_answer(
        self,
        learner_id: int,
        skill_id: int,
        question_id: int,
        question_type: QuestionType,
        answer: Any,
        time_used: int | None = None,
    ) -> GradeResult:
        return await self.grading.grade(
            learner_id, skill_id, question_id, question_type, answer, time_used
        )

    async def finalize_session(self, learner_id: int, skill_id: int) -> QuizResultRecord:
        """Resolve o subject da skill e finaliza a sessão.

        Raises:
            NotFound: skill inexistente
            SessionNotFound: nenhuma sessão em andamento
        """
        skill = self.bank.get_skill(skill_id)
        if skill is None:
            raise NotFound("The skill_id does not exist.")
        return await self.finalization.finalize(learner_id, skill.subject_id, skill_id)

    async def abandon_session(self, learner_id: int, skill_id: int) -> bool:
        return await self.finalization.abandon(learner_id, skill_id)

    async def can_edit_answer(self, question_id: int, question_type: QuestionType) -> bool:
        return await self.guard.can_edit_answer(question_id, question_type)

    async def update_answer(
        self, question_type: QuestionType, question_id: int, answer: str
    ) -> Question:
        return await self.editor.update_answer(question_type, question_id, answer)
