# =============================================================================
# TESTES - Answer Lock
# =============================================================================
# Bloqueio da resposta oficial enquanto alguma sessão usa a questão
# =============================================================================

import pytest


class TestAnswerLockGuard:
    """Testes para can_edit_answer."""

    @pytest.mark.asyncio
    async def test_editable_without_sessions(self, engine):
        from quiz_progress.models.enums import QuestionType

        assert await engine.can_edit_answer(201, QuestionType.MULTICHOICE)

    @pytest.mark.asyncio
    async def test_locked_while_session_in_progress(self, engine):
        from quiz_progress.models.enums import QuestionType

        await engine.start_session(3489, 11)

        assert not await engine.can_edit_answer(201, QuestionType.MULTICHOICE)
        assert not await engine.can_edit_answer(301, QuestionType.NUMERICAL)

    @pytest.mark.asyncio
    async def test_other_questions_stay_editable(self, engine):
        """Questão fora da sessão, ou mesmo ID em outro tipo, não bloqueia."""
        from quiz_progress.models.enums import QuestionType

        await engine.start_session(3489, 11)

        assert await engine.can_edit_answer(202, QuestionType.MULTICHOICE)
        assert await engine.can_edit_answer(201, QuestionType.NUMERICAL)

    @pytest.mark.asyncio
    async def test_unlocked_after_finalize(self, engine):
        from quiz_progress.models.enums import QuestionType

        await engine.start_session(3489, 11)
        await engine.finalize_session(3489, 11)

        assert await engine.can_edit_answer(201, QuestionType.MULTICHOICE)

    @pytest.mark.asyncio
    async def test_locked_by_any_learner(self, engine):
        """Basta uma sessão de qualquer aluno."""
        from quiz_progress.models.enums import QuestionType

        await engine.start_session(3489, 11)
        await engine.start_session(4120, 11)
        await engine.abandon_session(3489, 11)

        assert not await engine.can_edit_answer(201, QuestionType.MULTICHOICE)

    @pytest.mark.asyncio
    async def test_ensure_raises_answer_locked(self, session_store, sample_document):
        from quiz_progress.core.exceptions import AnswerLocked
        from quiz_progress.engine.answer_lock import AnswerLockGuard
        from quiz_progress.models.enums import QuestionType

        await session_store.put("3489_11", sample_document)
        guard = AnswerLockGuard(session_store)

        with pytest.raises(AnswerLocked) as exc_info:
            await guard.ensure_answer_editable(301, QuestionType.NUMERICAL)

        assert exc_info.value.to_dict() == {
            "errorType": "ValidationError",
            "errorMessage": (
                "ValidationError - Answer field cannot be updated because a quiz is "
                "already underway for this question."
            ),
        }


class TestQuestionAnswerEditor:
    """Testes para a edição guardada da resposta oficial."""

    @pytest.mark.asyncio
    async def test_update_when_unlocked(self, engine, bank):
        from quiz_progress.models.enums import QuestionType

        question = await engine.update_answer(QuestionType.MULTICHOICE, 201, "option_3")

        assert question.answer == "option_3"
        assert bank.get_question(QuestionType.MULTICHOICE, 201).answer == "option_3"

    @pytest.mark.asyncio
    async def test_update_rejected_while_locked(self, engine, bank):
        from quiz_progress.core.exceptions import AnswerLocked
        from quiz_progress.models.enums import QuestionType

        await engine.start_session(3489, 11)

        with pytest.raises(AnswerLocked):
            await engine.update_answer(QuestionType.NUMERICAL, 301, "4")

        assert bank.get_question(QuestionType.NUMERICAL, 301).answer == "3.5"

    @pytest.mark.asyncio
    async def test_update_accepted_after_abandon(self, engine, bank):
        from quiz_progress.models.enums import QuestionType

        await engine.start_session(3489, 11)
        await engine.abandon_session(3489, 11)

        await engine.update_answer(QuestionType.NUMERICAL, 301, "4")

        assert bank.get_question(QuestionType.NUMERICAL, 301).answer == "4"

    @pytest.mark.asyncio
    async def test_multichoice_must_reference_filled_option(self, engine):
        """option_4 vazia na questão 202 não pode ser resposta."""
        from quiz_progress.core.exceptions import ValidationError
        from quiz_progress.models.enums import QuestionType

        with pytest.raises(ValidationError, match="option_1"):
            await engine.update_answer(QuestionType.MULTICHOICE, 201, "option_9")

        with pytest.raises(ValidationError, match="does not match"):
            await engine.update_answer(QuestionType.MULTICHOICE, 202, "option_4")

    @pytest.mark.asyncio
    async def test_numerical_must_be_numeric(self, engine):
        from quiz_progress.core.exceptions import ValidationError
        from quiz_progress.models.enums import QuestionType

        with pytest.raises(ValidationError, match="numeric"):
            await engine.update_answer(QuestionType.NUMERICAL, 301, "quatro")

    @pytest.mark.asyncio
    async def test_types_without_answer_field(self, engine):
        from quiz_progress.core.exceptions import ValidationError
        from quiz_progress.models.enums import QuestionType

        with pytest.raises(ValidationError):
            await engine.update_answer(QuestionType.MATCHING, 401, "11,22,33,44")
        with pytest.raises(ValidationError):
            await engine.update_answer(QuestionType.STUDY_NOTE, 501, "1")

    @pytest.mark.asyncio
    async def test_unknown_question(self, engine):
        from quiz_progress.core.exceptions import NotFound
        from quiz_progress.models.enums import QuestionType

        with pytest.raises(NotFound):
            await engine.update_answer(QuestionType.NUMERICAL, 999, "1")
