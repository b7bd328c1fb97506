# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Mocks do AgentFS, banco SQLite em memória com uma skill completa e engines
# =============================================================================

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

LEARNER_ID = 3489
OTHER_LEARNER_ID = 4120
SKILL_ID = 11
SUBJECT_ID = 5


# =============================================================================
# FIXTURES DO AGENTFS
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock do AgentFS (KV vazio)."""
    mock = MagicMock()

    # KV Store
    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()
    mock.kv.list = AsyncMock(return_value=[])

    # Lifecycle
    mock.close = AsyncMock()

    return mock


@pytest.fixture
def mock_agentfs_with_data():
    """Mock do AgentFS com KV em dict (permite put/get reais)."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        _storage[key] = value

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix)]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def failing_agentfs():
    """Mock do AgentFS cujo KV sempre falha."""
    mock = MagicMock()
    error = ConnectionError("kv unavailable")

    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(side_effect=error)
    mock.kv.set = AsyncMock(side_effect=error)
    mock.kv.delete = AsyncMock(side_effect=error)
    mock.kv.list = AsyncMock(side_effect=error)

    return mock


# =============================================================================
# FIXTURES DO BANCO
# =============================================================================


@pytest.fixture
def bank():
    """SQLiteBank em memória com a skill 11 montada.

    Conteúdos (ordem de exibição):
        101 multichoice -> 201 (202 não publicada)
        102 numerical   -> 301
        103 matching    -> 401
        104 studyNote   -> 501
        105 multichoice não publicado -> 203
        106 multichoice sem questão publicada
    """
    from quiz_progress.bank.sqlite_bank import SQLiteBank
    from quiz_progress.models.enums import PublishedStatus, QuestionType

    db = SQLiteBank(":memory:")
    db.insert_skill(SKILL_ID, subject_id=SUBJECT_ID, skill_name="Frações")
    db.insert_skill(12, subject_id=SUBJECT_ID, skill_name="Skill vazia")
    db.grant_access(LEARNER_ID, SUBJECT_ID)
    db.grant_access(OTHER_LEARNER_ID, SUBJECT_ID)

    db.insert_content(101, SKILL_ID, QuestionType.MULTICHOICE, order=1)
    db.insert_content(102, SKILL_ID, QuestionType.NUMERICAL, order=2)
    db.insert_content(103, SKILL_ID, QuestionType.MATCHING, order=3)
    db.insert_content(104, SKILL_ID, QuestionType.STUDY_NOTE, order=4)
    db.insert_content(
        105,
        SKILL_ID,
        QuestionType.MULTICHOICE,
        order=5,
        published_status=PublishedStatus.UNPUBLISHED.value,
    )
    db.insert_content(106, SKILL_ID, QuestionType.MULTICHOICE, order=6)

    db.insert_question(
        QuestionType.MULTICHOICE,
        201,
        content_id=101,
        subject_id=SUBJECT_ID,
        body="Quanto e 2 + 2?",
        options={"option_1": "3", "option_2": "4", "option_3": "5", "option_4": "22"},
        answer="option_2",
        feedback="Soma simples",
        time_limit=30,
    )
    db.insert_question(
        QuestionType.MULTICHOICE,
        202,
        content_id=101,
        subject_id=SUBJECT_ID,
        body="Rascunho",
        options={"option_1": "a", "option_2": "b", "option_3": "c"},
        answer="option_1",
        time_limit=30,
        published_status=PublishedStatus.UNPUBLISHED.value,
    )
    db.insert_question(
        QuestionType.MULTICHOICE,
        203,
        content_id=105,
        subject_id=SUBJECT_ID,
        body="Conteúdo não publicado",
        options={"option_1": "a", "option_2": "b", "option_3": "c", "option_4": "d"},
        answer="option_3",
    )
    db.insert_question(
        QuestionType.NUMERICAL,
        301,
        content_id=102,
        subject_id=SUBJECT_ID,
        body="Metade de 7?",
        answer="3.5",
        feedback="7 / 2",
        time_limit=60,
    )
    db.insert_question(
        QuestionType.MATCHING,
        401,
        content_id=103,
        subject_id=SUBJECT_ID,
        body="Relacione",
        options={
            **{f"category_a_option_{i}": f"A{i}" for i in range(1, 5)},
            **{f"category_b_option_{i}": f"B{i}" for i in range(1, 5)},
        },
        time_limit=90,
    )
    db.insert_question(
        QuestionType.STUDY_NOTE,
        501,
        content_id=104,
        subject_id=SUBJECT_ID,
        body="Leia sobre frações",
    )

    yield db
    db.close()


# =============================================================================
# FIXTURES DOS ENGINES
# =============================================================================


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def session_store(mock_agentfs_with_data):
    from quiz_progress.storage.session_store import SessionStore

    return SessionStore(mock_agentfs_with_data)


@pytest.fixture
def engine(mock_agentfs_with_data, bank, rng):
    """ProgressEngine com KV em dict e banco em memória."""
    from quiz_progress.engine.progress_engine import ProgressEngine

    return ProgressEngine(mock_agentfs_with_data, bank, rng=rng)


@pytest.fixture
def sample_document():
    """Sessão com uma questão de cada tipo, parcialmente corrigida."""
    from quiz_progress.models.enums import QuestionType
    from quiz_progress.models.state import QuestionAttempt, SessionDocument

    return SessionDocument(
        attempts=[
            QuestionAttempt(QuestionType.MULTICHOICE, 201, result=1, time_limit=30, time_used=12),
            QuestionAttempt(QuestionType.NUMERICAL, 301, result=0, time_limit=60, time_used=40),
            QuestionAttempt(QuestionType.MATCHING, 401, result=None, time_limit=90),
            QuestionAttempt(QuestionType.STUDY_NOTE, 501),
        ]
    )
