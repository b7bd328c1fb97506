"""Progress Schemas - Modelos Pydantic para request/response."""

from pydantic import BaseModel, Field

from .enums import QuestionType

SubmittedAnswer = str | int | float | list[str | int] | None


class SessionItem(BaseModel):
    """Questão exibida ao aluno (sessão nova ou em andamento)."""

    type: QuestionType = Field(..., description="Tipo da questão")
    question_id: int = Field(..., description="ID da questão no banco")
    question_content: str | None = Field(None, description="Enunciado")
    study_note_content: str | None = Field(None, description="Conteúdo do study note")
    options: dict[str, str | None] = Field(
        default_factory=dict,
        description="Alternativas (option_N ou category_X_option_N)",
    )
    time_limit: int | None = Field(None, description="Limite de tempo em segundos")
    result: int | None = Field(None, description="0/1 se já corrigida")
    time_used: int | None = Field(None, description="Tempo gasto em segundos")


class GradeAnswerRequest(BaseModel):
    """Request para corrigir uma resposta."""

    skill_id: int = Field(..., description="ID da skill da sessão")
    question_id: int = Field(..., description="ID da questão")
    type: QuestionType = Field(..., description="Tipo da questão")
    answer: SubmittedAnswer = Field(
        None,
        description=(
            "option_N (multichoice), número (numerical), lista ou '11,22' "
            "(matching), 1 (studyNote)"
        ),
    )
    time_used: int | None = Field(None, ge=0, description="Tempo gasto em segundos")


class GradeResult(BaseModel):
    """Resultado da correção; a resposta correta é sempre revelada."""

    question_id: int
    result: int = Field(..., ge=0, le=1)
    feedback: str | None = None
    correct_answer: str | None = None


class GradeAnswerResponse(BaseModel):
    operation_status: str = "OK"
    question_result: GradeResult


class SubmitResultsRequest(BaseModel):
    skill_id: int = Field(..., description="ID da skill a finalizar")


class QuizResultResponse(BaseModel):
    """Resumo da sessão finalizada."""

    skill_id: int
    percentage: str = Field(..., description="Fração 0-1 com 2 casas decimais")
    time_limit: int
    time_used: int


class SubmitResultsResponse(BaseModel):
    operation_status: str = "OK"
    quiz_result: QuizResultResponse


class AbandonSessionResponse(BaseModel):
    skill_id: int
    deleted: bool


class AnswerEditRequest(BaseModel):
    answer: str = Field(..., min_length=1, description="Nova resposta oficial")


class AnswerEditResponse(BaseModel):
    question_id: int
    type: QuestionType
    answer: str


class AnswerLockResponse(BaseModel):
    question_id: int
    type: QuestionType
    editable: bool = Field(..., description="False se alguma sessão ativa referência a questão")
