"""Session Finalization Engine - Agregação da sessão em resultado durável."""

from dataclasses import dataclass

from ..bank.base import ResultSink
from ..core.exceptions import SessionNotFound, TransientStoreError
from ..core.logger import get_logger
from ..models.enums import QuestionType
from ..models.records import QuizResultRecord
from ..models.state import SessionDocument, SessionKey
from ..storage.session_store import SessionStore

logger = get_logger("finalization_engine")


@dataclass
class SessionSummary:
    percentage: float
    time_limit: int
    time_used: int


def aggregate(document: SessionDocument) -> SessionSummary:
    """Calcula percentual e tempos da sessão.

    Regras:
        - Sessão só de study notes: média dos resultados dos study notes.
        - Sessão mista: média apenas das questões que não são study notes;
          study notes não entram no percentual.
        - Resultado nulo conta como 0 no numerador e entra no denominador.
        - Tempos somam todas as tentativas (nulo = 0).
    """
    total = 0
    study_notes = 0
    score = 0
    study_note_score = 0
    time_limit = 0
    time_used = 0

    for attempt in document:
        result = attempt.result or 0
        if attempt.type == QuestionType.STUDY_NOTE:
            study_note_score += result
            study_notes += 1
        else:
            score += result
        time_limit += attempt.time_limit or 0
        time_used += attempt.time_used or 0
        total += 1

    if study_notes == total:
        percentage = study_note_score / total if study_note_score else 0.0
    else:
        percentage = score / (total - study_notes) if score else 0.0

    return SessionSummary(percentage=percentage, time_limit=time_limit, time_used=time_used)


class SessionFinalizationEngine:
    """Fecha a sessão: grava QuizResultRecord e remove o documento.

    A remoção é incondicional. Se ela falhar por erro transitório do store, o
    erro é logado e o resultado já gravado continua valendo; o documento órfão
    é sobrescrito no próximo início de sessão da mesma chave.
    """

    def __init__(self, store: SessionStore, results: ResultSink):
        self.store = store
        self.results = results

    async def finalize(self, learner_id: int, subject_id: int, skill_id: int) -> QuizResultRecord:
        """Agrega a sessão e persiste o resultado.

        Raises:
            SessionNotFound: aluno nunca iniciou (ou já finalizou) a sessão
        """
        key = SessionKey(learner_id=learner_id, skill_id=skill_id)
        document = await self.store.get(key)
        if document is None:
            raise SessionNotFound()

        summary = aggregate(document)
        record = QuizResultRecord(
            learner_id=learner_id,
            subject_id=subject_id,
            skill_id=skill_id,
            percentage=summary.percentage,
            time_limit=summary.time_limit,
            time_used=summary.time_used,
        )
        self.results.save_quiz_result(record)

        try:
            await self.store.delete(key)
        except TransientStoreError as e:
            logger.error("Falha ao remover sessão finalizada", key=str(key), error=str(e))

        logger.info(
            "Sessão finalizada",
            key=str(key),
            percentage=record.display_percentage,
            attempts=len(document),
        )
        return record

    async def abandon(self, learner_id: int, skill_id: int) -> bool:
        """Descarta a sessão sem gravar resultado.

        Returns:
            True se havia sessão para remover
        """
        key = SessionKey(learner_id=learner_id, skill_id=skill_id)
        if not await self.store.exists(key):
            return False
        await self.store.delete(key)
        logger.info("Sessão abandonada", key=str(key))
        return True
