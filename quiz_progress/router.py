"""Progress Router - Endpoints FastAPI das sessões de quiz."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header

import app_state
from config import get_config

from .core.exceptions import Unauthorized
from .core.logger import get_logger
from .engine.progress_engine import ProgressEngine
from .models.enums import QuestionType
from .models.schemas import (
    AbandonSessionResponse,
    AnswerEditRequest,
    AnswerEditResponse,
    AnswerLockResponse,
    GradeAnswerRequest,
    GradeAnswerResponse,
    QuizResultResponse,
    SessionItem,
    SubmitResultsRequest,
    SubmitResultsResponse,
)

logger = get_logger("router")

router = APIRouter(prefix="/progress", tags=["Progress"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


async def get_progress_engine() -> ProgressEngine:
    """Dependency para obter ProgressEngine configurado."""
    return await app_state.get_engine()


def verify_api_key(x_api_key: str | None = Header(default=None)) -> str | None:
    """Exige X-API-Key quando AUTH_ENABLED=true."""
    config = get_config()
    if not config.auth_enabled:
        return None
    if not x_api_key or x_api_key != config.api_key:
        raise Unauthorized("Invalid or missing API key")
    return x_api_key


def get_current_learner(x_user_id: int = Header(..., description="ID do aluno autenticado")) -> int:
    """ID do aluno, repassado pelo middleware de autenticação."""
    return x_user_id


# =============================================================================
# SESSION ENDPOINTS
# =============================================================================


@router.get("/learning-resources/{skill_id}", response_model=list[SessionItem])
async def start_session(
    skill_id: int,
    learner_id: int = Depends(get_current_learner),
    engine: ProgressEngine = Depends(get_progress_engine),
    _api_key: str | None = Depends(verify_api_key),
):
    """Inicia uma sessão nova para a skill.

    - Escolhe uma questão publicada por conteúdo, na ordem do conteúdo
    - Descarta qualquer sessão em andamento para a mesma skill
    """
    return await engine.start_session(learner_id, skill_id)


@router.get("/in-progress-resources/{skill_id}", response_model=list[SessionItem])
async def get_session_status(
    skill_id: int,
    learner_id: int = Depends(get_current_learner),
    engine: ProgressEngine = Depends(get_progress_engine),
    _api_key: str | None = Depends(verify_api_key),
):
    """Retorna a sessão em andamento na ordem gravada, com resultados parciais."""
    return await engine.get_session_status(learner_id, skill_id)


@router.delete("/in-progress-resources/{skill_id}", response_model=AbandonSessionResponse)
async def abandon_session(
    skill_id: int,
    learner_id: int = Depends(get_current_learner),
    engine: ProgressEngine = Depends(get_progress_engine),
    _api_key: str | None = Depends(verify_api_key),
):
    """Descarta a sessão sem gravar resultado."""
    deleted = await engine.abandon_session(learner_id, skill_id)
    return AbandonSessionResponse(skill_id=skill_id, deleted=deleted)


# =============================================================================
# ANSWER & RESULTS ENDPOINTS
# =============================================================================


@router.post("/check-answers", response_model=GradeAnswerResponse)
async def check_answer(
    request: GradeAnswerRequest,
    learner_id: int = Depends(get_current_learner),
    engine: ProgressEngine = Depends(get_progress_engine),
    _api_key: str | None = Depends(verify_api_key),
):
    """Corrige uma resposta.

    - Sempre grava o resultado individual
    - Atualiza a tentativa na sessão (404 se não houver sessão)
    - Revela a resposta correta
    """
    result = await engine.grade_answer(
        learner_id,
        request.skill_id,
        request.question_id,
        request.type,
        request.answer,
        request.time_used,
    )
    return GradeAnswerResponse(question_result=result)


@router.post("/submit-results", response_model=SubmitResultsResponse)
async def submit_results(
    request: SubmitResultsRequest,
    learner_id: int = Depends(get_current_learner),
    engine: ProgressEngine = Depends(get_progress_engine),
    _api_key: str | None = Depends(verify_api_key),
):
    """Finaliza a sessão: grava o resultado agregado e remove a sessão."""
    record = await engine.finalize_session(learner_id, request.skill_id)
    return SubmitResultsResponse(
        quiz_result=QuizResultResponse(
            skill_id=record.skill_id,
            percentage=record.display_percentage,
            time_limit=record.time_limit,
            time_used=record.time_used,
        )
    )


# =============================================================================
# ANSWER LOCK
# =============================================================================


@router.get(
    "/questions/{question_type}/{question_id}/answer-lock",
    response_model=AnswerLockResponse,
)
async def get_answer_lock(
    question_type: QuestionType,
    question_id: int,
    engine: ProgressEngine = Depends(get_progress_engine),
    _api_key: str | None = Depends(verify_api_key),
):
    """Indica se a resposta oficial da questão pode ser editada agora."""
    editable = await engine.can_edit_answer(question_id, question_type)
    return AnswerLockResponse(question_id=question_id, type=question_type, editable=editable)


@router.patch(
    "/questions/{question_type}/{question_id}/answer",
    response_model=AnswerEditResponse,
)
async def update_answer(
    question_type: QuestionType,
    question_id: int,
    request: AnswerEditRequest,
    engine: ProgressEngine = Depends(get_progress_engine),
    _api_key: str | None = Depends(verify_api_key),
):
    """Altera a resposta oficial; 400 se alguma sessão ativa usa a questão."""
    question = await engine.update_answer(question_type, question_id, request.answer)
    logger.info("Resposta oficial editada", type=question_type.value, question_id=question_id)
    return AnswerEditResponse(question_id=question_id, type=question_type, answer=question.answer)
