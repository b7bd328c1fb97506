"""Answer Grading Engine - Correção de respostas e atualização da sessão."""

from dataclasses import dataclass
from typing import Any, Callable

from ..bank.base import QuestionBank, ResultSink
from ..core.exceptions import (
    NotFound,
    SessionNotFound,
    UnsupportedQuestionType,
    ValidationError,
)
from ..core.logger import get_logger
from ..models.enums import QuestionType
from ..models.records import Question, QuestionResultRecord
from ..models.schemas import GradeResult
from ..models.state import QuestionAttempt, SessionKey
from ..storage.session_store import SessionStore

logger = get_logger("grading_engine")

MULTICHOICE_KEYS = ("option_1", "option_2", "option_3", "option_4")
MATCHING_VALID_PAIRS = frozenset({"11", "22", "33", "44"})
MATCHING_ANSWER = "11,22,33,44"
STUDY_NOTE_ACK = "1"


@dataclass
class Verdict:
    """Resultado de uma função de correção."""

    result: int
    correct_answer: str | None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def grade_multichoice(question: Question, submitted: Any) -> Verdict:
    if submitted is not None and submitted not in MULTICHOICE_KEYS:
        raise ValidationError(
            'multichoiceAnswer must be "option_1", "option_2", "option_3" or "option_4"'
        )
    correct = submitted is not None and submitted == question.answer
    return Verdict(int(correct), question.answer)


def grade_numerical(question: Question, submitted: Any) -> Verdict:
    if submitted is None:
        return Verdict(0, question.answer)
    if _as_number(submitted) is None:
        raise ValidationError("numericalAnswer must be numeric")

    expected = _as_number(question.answer)
    if expected is not None:
        correct = _as_number(submitted) == expected
    else:
        correct = str(submitted) == str(question.answer)
    return Verdict(int(correct), question.answer)


def grade_matching(question: Question, submitted: Any) -> Verdict:
    """Correto se todos os pares enviados estão em {11, 22, 33, 44}.

    Não compara com o conteúdo da questão.
    """
    if submitted is None:
        return Verdict(0, MATCHING_ANSWER)

    if isinstance(submitted, str):
        pairs = [p.strip() for p in submitted.split(",")]
    elif isinstance(submitted, list):
        pairs = [str(p).strip() for p in submitted]
    else:
        pairs = [str(submitted)]

    correct = bool(pairs) and all(p in MATCHING_VALID_PAIRS for p in pairs)
    return Verdict(int(correct), MATCHING_ANSWER)


def grade_study_note(question: Question, submitted: Any) -> Verdict:
    """Reconhecimento de leitura: correto se o flag for 1."""
    correct = submitted is not None and _as_number(submitted) == 1
    return Verdict(int(correct), STUDY_NOTE_ACK)


GRADERS: dict[QuestionType, Callable[[Question, Any], Verdict]] = {
    QuestionType.MULTICHOICE: grade_multichoice,
    QuestionType.NUMERICAL: grade_numerical,
    QuestionType.MATCHING: grade_matching,
    QuestionType.STUDY_NOTE: grade_study_note,
}


class AnswerGradingEngine:
    """Corrige respostas e grava o resultado no documento da sessão.

    O registro durável (QuestionResultRecord) é gravado sempre, antes de tocar
    na sessão. Se a sessão não existir ou a escrita dela falhar, o registro
    durável permanece: não há transação entre os dois stores.

    Duas correções concorrentes na mesma sessão fazem read-modify-write sem
    lock; a última escrita vence.
    """

    def __init__(self, store: SessionStore, bank: QuestionBank, results: ResultSink):
        self.store = store
        self.bank = bank
        self.results = results

    def evaluate(self, question: Question, submitted: Any) -> Verdict:
        """Aplica a função de correção do tipo da questão."""
        grader = GRADERS.get(question.type)
        if grader is None:
            raise UnsupportedQuestionType()
        return grader(question, submitted)

    async def grade(
        self,
        learner_id: int,
        skill_id: int,
        question_id: int,
        question_type: QuestionType,
        submitted_answer: Any,
        time_used: int | None,
    ) -> GradeResult:
        """Corrige uma resposta e atualiza a tentativa na sessão.

        Raises:
            NotFound: questão inexistente na tabela do tipo
            ValidationError: resposta em formato inválido
            SessionNotFound: nenhuma sessão ativa (registro durável já gravado)
        """
        question = self.bank.get_question(question_type, question_id)
        if question is None:
            raise NotFound("The question_id does not exist.")

        verdict = self.evaluate(question, submitted_answer)

        self.results.save_question_result(
            QuestionResultRecord(
                learner_id=learner_id,
                subject_id=question.subject_id,
                skill_id=skill_id,
                question_id=question_id,
                type=question_type,
                result=verdict.result,
                time_used=time_used,
                time_limit=question.time_limit,
            )
        )

        key = SessionKey(learner_id=learner_id, skill_id=skill_id)
        document = await self.store.get(key)
        if document is None:
            logger.warning("Correção sem sessão ativa", key=str(key), question_id=question_id)
            raise SessionNotFound()

        document.upsert(
            QuestionAttempt(
                type=question_type,
                question_id=question_id,
                result=verdict.result,
                time_used=time_used,
                time_limit=question.time_limit,
            )
        )
        await self.store.put(key, document)

        logger.info(
            "Resposta corrigida",
            key=str(key),
            type=question_type.value,
            question_id=question_id,
            result=verdict.result,
        )
        return GradeResult(
            question_id=question_id,
            result=verdict.result,
            feedback=question.feedback,
            correct_answer=verdict.correct_answer,
        )
