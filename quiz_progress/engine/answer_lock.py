"""Answer-Lock Guard - Bloqueia edição da resposta oficial durante sessões."""

from ..bank.base import QuestionBank
from ..core.exceptions import AnswerLocked, NotFound, ValidationError
from ..core.logger import get_logger
from ..models.enums import QuestionType
from ..models.records import Question
from ..storage.session_store import SessionStore

logger = get_logger("answer_lock")


class AnswerLockGuard:
    """Verifica se alguma sessão ativa referência a questão.

    Checagem best-effort: o scan fica obsoleto assim que retorna.
    """

    def __init__(self, store: SessionStore):
        self.store = store

    async def can_edit_answer(self, question_id: int, question_type: QuestionType) -> bool:
        return not await self.store.scan_for_reference(question_id, question_type)

    async def ensure_answer_editable(self, question_id: int, question_type: QuestionType) -> None:
        if not await self.can_edit_answer(question_id, question_type):
            raise AnswerLocked()


class QuestionAnswerEditor:
    """Caminho de edição do campo ``answer`` no banco de questões.

    Os demais campos da questão não passam por aqui e não são bloqueados.
    """

    def __init__(self, bank: QuestionBank, guard: AnswerLockGuard):
        self.bank = bank
        self.guard = guard

    @staticmethod
    def validate_answer(question: Question, answer: str) -> str:
        if question.type == QuestionType.MULTICHOICE:
            if answer not in question.options:
                raise ValidationError(
                    "The answer field should contain one of the following: "
                    "option_1, option_2, option_3, option_4."
                )
            if not question.options.get(answer):
                raise ValidationError(
                    "The answer provided does not match one of the options provided."
                )
            return answer

        if question.type == QuestionType.NUMERICAL:
            try:
                float(answer)
            except ValueError as e:
                raise ValidationError("The answer field must be numeric.") from e
            return answer

        raise ValidationError(f"{question.type.value} has no editable answer field.")

    async def update_answer(
        self, question_type: QuestionType, question_id: int, answer: str
    ) -> Question:
        """Valida, consulta o lock e grava a nova resposta.

        Raises:
            NotFound: questão inexistente
            ValidationError: resposta inválida para o tipo
            AnswerLocked: questão referenciada por sessão ativa
        """
        question = self.bank.get_question(question_type, question_id)
        if question is None:
            raise NotFound("The question_id provided does not exist.")

        answer = self.validate_answer(question, answer)
        await self.guard.ensure_answer_editable(question_id, question_type)

        self.bank.update_answer(question_type, question_id, answer)
        question.answer = answer
        return question
