# =============================================================================
# TESTES - Progress Models e Exceções
# =============================================================================
# SessionDocument, registros e formato de erro
# =============================================================================

import pytest


class TestSessionDocument:
    """Testes para o documento de sessão."""

    def test_session_key_format(self):
        from quiz_progress.models.state import SessionKey

        assert str(SessionKey(learner_id=3489, skill_id=11)) == "3489_11"

    def test_upsert_replaces_in_place(self, sample_document):
        """Substituir não muda a ordem nem o tamanho."""
        from quiz_progress.models.enums import QuestionType
        from quiz_progress.models.state import QuestionAttempt

        sample_document.upsert(QuestionAttempt(QuestionType.NUMERICAL, 301, result=1))

        assert len(sample_document) == 4
        assert sample_document.attempts[1].result == 1

    def test_upsert_appends_new_identity(self, sample_document):
        from quiz_progress.models.enums import QuestionType
        from quiz_progress.models.state import QuestionAttempt

        sample_document.upsert(QuestionAttempt(QuestionType.MULTICHOICE, 301))

        assert len(sample_document) == 5
        assert sample_document.find(QuestionType.NUMERICAL, 301).result == 0

    def test_references(self, sample_document):
        from quiz_progress.models.enums import QuestionType

        assert sample_document.references(QuestionType.STUDY_NOTE, 501)
        assert not sample_document.references(QuestionType.STUDY_NOTE, 201)


class TestRecords:
    """Testes para registros duráveis."""

    def test_display_percentage(self):
        from quiz_progress.models.records import QuizResultRecord

        record = QuizResultRecord(3489, 5, 11, 2 / 3, 180, 82)

        assert record.display_percentage == "0.67"
        assert record.to_dict()["time_used"] == 82


class TestErrorFormat:
    """Testes para o formato {errorType, errorMessage}."""

    def test_session_not_found(self):
        from quiz_progress.core.exceptions import SessionNotFound

        error = SessionNotFound()

        assert error.status_code == 404
        assert error.to_dict() == {
            "errorType": "NotFoundError",
            "errorMessage": "NotFoundError - 305 - No results were found.",
        }

    def test_permission_denied(self):
        from quiz_progress.core.exceptions import PermissionDenied

        error = PermissionDenied("User does not have the permission")

        assert error.status_code == 403
        assert error.to_dict()["errorMessage"] == (
            "ForbiddenError - User does not have the permission"
        )

    @pytest.mark.parametrize(
        "name,status",
        [
            ("NotFound", 404),
            ("PermissionDenied", 403),
            ("ValidationError", 400),
            ("AnswerLocked", 400),
            ("TransientStoreError", 503),
            ("Unauthorized", 401),
            ("UnsupportedQuestionType", 400),
        ],
    )
    def test_status_codes(self, name, status):
        from quiz_progress import core

        assert getattr(core, name).status_code == status

    def test_answer_locked_is_validation_error(self):
        from quiz_progress.core.exceptions import AnswerLocked, ValidationError

        assert issubclass(AnswerLocked, ValidationError)
