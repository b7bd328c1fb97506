"""Exceções de domínio do motor de progresso.

Cada erro tem um ``error_type`` estável e o status HTTP usado pelo router.
"""


class ProgressError(Exception):
    """Base para erros expostos ao cliente."""

    error_type = "ProgressError"
    status_code = 500

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self) -> dict[str, str]:
        """Formato de resposta: ``{"errorType", "errorMessage"}``."""
        prefix = f"{self.error_type} - "
        if self.code is not None:
            prefix += f"{self.code} - "
        return {
            "errorType": self.error_type,
            "errorMessage": prefix + self.message,
        }


class NotFound(ProgressError):
    """Skill, questão ou sessão inexistente."""

    error_type = "NotFoundError"
    status_code = 404


class SessionNotFound(NotFound):
    """Nenhuma sessão ativa para (learner, skill)."""

    def __init__(self, message: str = "No results were found."):
        super().__init__(message, code=305)


class PermissionDenied(ProgressError):
    error_type = "ForbiddenError"
    status_code = 403


class ValidationError(ProgressError):
    error_type = "ValidationError"
    status_code = 400


class AnswerLocked(ValidationError):
    """Edição do campo ``answer`` bloqueada por sessão em andamento."""

    def __init__(self):
        super().__init__(
            "Answer field cannot be updated because a quiz is already underway "
            "for this question."
        )


class TransientStoreError(ProgressError):
    """Falha de I/O no document store (timeout, conexão, etc)."""

    error_type = "TransientStoreError"
    status_code = 503


class UnsupportedQuestionType(ValidationError):
    """Tipo de questão fora do conjunto fechado."""

    def __init__(self):
        super().__init__(
            "The type should be one of the following: multichoiceQuestion, "
            "matchingQuestion, numericalQuestion, studyNote"
        )


class Unauthorized(ProgressError):
    """X-API-Key ausente ou inválida."""

    error_type = "UnauthorizedError"
    status_code = 401
