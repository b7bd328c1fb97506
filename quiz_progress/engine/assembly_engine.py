"""Quiz Assembly Engine - Montagem de sessão aleatória por skill."""

import random

from ..bank.base import PermissionService, QuestionBank
from ..core.exceptions import NotFound, PermissionDenied
from ..core.logger import get_logger
from ..models.enums import QuestionType
from ..models.records import Question
from ..models.schemas import SessionItem
from ..models.state import QuestionAttempt, SessionDocument, SessionKey
from ..storage.session_store import SessionStore

logger = get_logger("assembly_engine")

MATCHING_POSITIONS = 4


class QuizAssemblyEngine:
    """Monta uma sessão nova escolhendo uma questão por conteúdo da skill.

    A sessão nova sobrescreve incondicionalmente qualquer sessão em andamento
    para o mesmo (learner, skill); progresso não submetido é descartado.

    Example:
        >>> engine = QuizAssemblyEngine(store, bank, bank)
        >>> display, stored = await engine.assemble(learner_id=3489, skill_id=11)
    """

    def __init__(
        self,
        store: SessionStore,
        bank: QuestionBank,
        permissions: PermissionService,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.bank = bank
        self.permissions = permissions
        self.rng = rng or random.Random()

    def _pick_question(self, question_type: QuestionType, content_id: int) -> Question | None:
        candidates = self.bank.list_published_questions(question_type, content_id)
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def _matching_permutation(self) -> list[int]:
        """Ordem de exibição das posições 1-4, igual nas duas categorias."""
        positions = list(range(1, MATCHING_POSITIONS + 1))
        self.rng.shuffle(positions)
        return positions

    def build_display_item(self, question: Question) -> SessionItem:
        """Payload completo da questão para o aluno (sem resposta)."""
        if question.type == QuestionType.STUDY_NOTE:
            return SessionItem(
                type=question.type,
                question_id=question.question_id,
                study_note_content=question.question_content,
            )

        options = dict(question.options)
        if question.type == QuestionType.MATCHING:
            # Mesma permutação em A e B: posições alinhadas continuam pares
            order = self._matching_permutation()
            options = {}
            for position, source in enumerate(order, start=1):
                for category in ("a", "b"):
                    options[f"category_{category}_option_{position}"] = question.options.get(
                        f"category_{category}_option_{source}"
                    )

        return SessionItem(
            type=question.type,
            question_id=question.question_id,
            question_content=question.question_content,
            options=options,
            time_limit=question.time_limit,
        )

    async def assemble(
        self, learner_id: int, skill_id: int
    ) -> tuple[list[SessionItem], SessionDocument]:
        """Cria a sessão e retorna (exibição, documento gravado).

        Args:
            learner_id: ID do aluno
            skill_id: ID da skill

        Raises:
            NotFound: skill inexistente
            PermissionDenied: aluno sem acesso ao subject da skill
        """
        skill = self.bank.get_skill(skill_id)
        if skill is None:
            raise NotFound("The skill_id does not exist.")

        if not self.permissions.has_access(learner_id, skill.subject_id):
            raise PermissionDenied("User does not have the permission")

        display: list[SessionItem] = []
        document = SessionDocument()

        for content in self.bank.list_published_content(skill_id):
            question = self._pick_question(content.type, content.content_id)
            if question is None:
                logger.debug("Conteúdo sem questão publicada", content_id=content.content_id)
                continue

            display.append(self.build_display_item(question))
            document.upsert(
                QuestionAttempt(
                    type=question.type,
                    question_id=question.question_id,
                    time_limit=question.time_limit,
                )
            )

        key = SessionKey(learner_id=learner_id, skill_id=skill_id)
        if await self.store.exists(key):
            await self.store.delete(key)
            logger.info("Sessão anterior descartada", key=str(key))
        await self.store.put(key, document)

        logger.info("Sessão criada", key=str(key), attempts=len(document))
        return display, document
