# =============================================================================
# SQLITE BANK - Banco de questões, memberships e resultados em SQLite
# =============================================================================
# Implementa QuestionBank, PermissionService e ResultSink sobre um único
# arquivo SQLite via apsw.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Optional

import apsw

from ..core.logger import get_logger
from ..models.enums import PublishedStatus, QuestionType, RecordStatus
from ..models.records import (
    Content,
    Question,
    QuestionResultRecord,
    QuizResultRecord,
    Skill,
)
from .base import PermissionService, QuestionBank, ResultSink

logger = get_logger("sqlite_bank")


@dataclass(frozen=True)
class QuestionTable:
    """Mapeamento tipo -> tabela."""

    name: str
    body_column: str
    option_columns: tuple[str, ...] = ()
    has_answer: bool = True


MULTICHOICE_OPTIONS = tuple(f"option_{i}" for i in range(1, 5))
MATCHING_OPTIONS = tuple(f"category_a_option_{i}" for i in range(1, 5)) + tuple(
    f"category_b_option_{i}" for i in range(1, 5)
)

QUESTION_TABLES = {
    QuestionType.MULTICHOICE: QuestionTable(
        "multichoice_questions", "question_content", MULTICHOICE_OPTIONS
    ),
    QuestionType.NUMERICAL: QuestionTable("numerical_questions", "question_content"),
    QuestionType.MATCHING: QuestionTable(
        "matching_questions", "question_content", MATCHING_OPTIONS, has_answer=False
    ),
    QuestionType.STUDY_NOTE: QuestionTable(
        "study_notes", "study_note_content", has_answer=False
    ),
}

_QUESTION_COMMON = """
    question_id INTEGER PRIMARY KEY,
    content_id INTEGER NOT NULL,
    subject_id INTEGER NOT NULL,
    feedback TEXT,
    time_limit INTEGER,
    status TEXT NOT NULL DEFAULT 'active',
    published_status TEXT NOT NULL DEFAULT 'unpublished'
"""


def _question_ddl(table: QuestionTable) -> str:
    columns = [f"{table.body_column} TEXT"]
    columns += [f"{c} TEXT" for c in table.option_columns]
    if table.has_answer:
        columns.append("answer TEXT")
    return (
        f"CREATE TABLE IF NOT EXISTS {table.name} ("
        f"{_QUESTION_COMMON}, {', '.join(columns)})"
    )


SCHEMA = [
    """CREATE TABLE IF NOT EXISTS skills (
        skill_id INTEGER PRIMARY KEY,
        subject_id INTEGER NOT NULL,
        skill_name TEXT NOT NULL DEFAULT ''
    )""",
    """CREATE TABLE IF NOT EXISTS content (
        content_id INTEGER PRIMARY KEY,
        skill_id INTEGER NOT NULL,
        type TEXT NOT NULL,
        "order" INTEGER NOT NULL DEFAULT 0,
        status TEXT NOT NULL DEFAULT 'active',
        published_status TEXT NOT NULL DEFAULT 'unpublished'
    )""",
    """CREATE TABLE IF NOT EXISTS access_code_memberships (
        user_id INTEGER NOT NULL,
        subject_id INTEGER NOT NULL,
        PRIMARY KEY (user_id, subject_id)
    )""",
    """CREATE TABLE IF NOT EXISTS quiz_results (
        quiz_result_id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        subject_id INTEGER NOT NULL,
        skill_id INTEGER NOT NULL,
        percentage REAL NOT NULL,
        time_limit INTEGER NOT NULL,
        used_time INTEGER NOT NULL,
        timestamp TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS question_results (
        question_result_id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        subject_id INTEGER NOT NULL,
        skill_id INTEGER NOT NULL,
        question_id INTEGER NOT NULL,
        type TEXT NOT NULL,
        result INTEGER NOT NULL,
        time_limit INTEGER,
        time_used INTEGER,
        timestamp TEXT NOT NULL
    )""",
] + [_question_ddl(t) for t in QUESTION_TABLES.values()]


class SQLiteBank(QuestionBank, PermissionService, ResultSink):
    """Colaboradores relacionais sobre um arquivo SQLite.

    Example:
        >>> bank = SQLiteBank(":memory:")
        >>> bank.insert_skill(11, subject_id=5)
        >>> bank.get_skill(11).subject_id
        5
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.conn = apsw.Connection(db_path)
        self._create_schema()
        logger.info("Banco de questões aberto", db_path=db_path)

    def _create_schema(self) -> None:
        cursor = self.conn.cursor()
        for ddl in SCHEMA:
            cursor.execute(ddl)

    def _fetch(
        self, sql: str, columns: list[str], bindings: tuple = ()
    ) -> list[dict[str, Any]]:
        """Executa SELECT e retorna linhas como dict na ordem de ``columns``."""
        cursor = self.conn.cursor()
        return [dict(zip(columns, row)) for row in cursor.execute(sql, bindings)]

    def _execute(self, sql: str, bindings: tuple = ()) -> None:
        cursor = self.conn.cursor()
        cursor.execute(sql, bindings)

    def close(self) -> None:
        self.conn.close()

    # -------------------------------------------------------------------------
    # QuestionBank
    # -------------------------------------------------------------------------

    def get_skill(self, skill_id: int) -> Optional[Skill]:
        rows = self._fetch(
            "SELECT skill_id, subject_id, skill_name FROM skills WHERE skill_id = ?",
            ["skill_id", "subject_id", "skill_name"],
            (skill_id,),
        )
        return Skill(**rows[0]) if rows else None

    def list_published_content(self, skill_id: int) -> list[Content]:
        rows = self._fetch(
            'SELECT content_id, skill_id, type, "order" FROM content '
            "WHERE skill_id = ? AND status = ? AND published_status = ? "
            'ORDER BY "order", content_id',
            ["content_id", "skill_id", "type", "order"],
            (skill_id, RecordStatus.ACTIVE.value, PublishedStatus.PUBLISHED.value),
        )
        contents = []
        for row in rows:
            try:
                row["type"] = QuestionType(row["type"])
            except ValueError:
                logger.warning("Conteúdo com tipo desconhecido ignorado", **row)
                continue
            contents.append(Content(**row))
        return contents

    def _question_columns(self, table: QuestionTable) -> list[str]:
        columns = ["question_id", "content_id", "subject_id", "feedback", "time_limit"]
        columns.append(table.body_column)
        columns += list(table.option_columns)
        if table.has_answer:
            columns.append("answer")
        return columns

    def _row_to_question(
        self, question_type: QuestionType, table: QuestionTable, row: dict[str, Any]
    ) -> Question:
        answer = row.get("answer")
        return Question(
            question_id=row["question_id"],
            type=question_type,
            content_id=row["content_id"],
            subject_id=row["subject_id"],
            question_content=row[table.body_column],
            options={c: row[c] for c in table.option_columns},
            answer=None if answer is None else str(answer),
            feedback=row["feedback"],
            time_limit=row["time_limit"],
        )

    def list_published_questions(
        self, question_type: QuestionType, content_id: int
    ) -> list[Question]:
        table = QUESTION_TABLES[question_type]
        columns = self._question_columns(table)
        rows = self._fetch(
            f"SELECT {', '.join(columns)} FROM {table.name} "
            "WHERE content_id = ? AND status = ? AND published_status = ? "
            "ORDER BY question_id",
            columns,
            (content_id, RecordStatus.ACTIVE.value, PublishedStatus.PUBLISHED.value),
        )
        return [self._row_to_question(question_type, table, r) for r in rows]

    def get_question(self, question_type: QuestionType, question_id: int) -> Optional[Question]:
        table = QUESTION_TABLES[question_type]
        columns = self._question_columns(table)
        rows = self._fetch(
            f"SELECT {', '.join(columns)} FROM {table.name} WHERE question_id = ?",
            columns,
            (question_id,),
        )
        return self._row_to_question(question_type, table, rows[0]) if rows else None

    def update_answer(self, question_type: QuestionType, question_id: int, answer: str) -> None:
        table = QUESTION_TABLES[question_type]
        if not table.has_answer:
            raise ValueError(f"{question_type.value} não possui campo answer")
        self._execute(
            f"UPDATE {table.name} SET answer = ? WHERE question_id = ?",
            (answer, question_id),
        )
        logger.info("Resposta oficial alterada", type=question_type.value, question_id=question_id)

    # -------------------------------------------------------------------------
    # PermissionService
    # -------------------------------------------------------------------------

    def has_access(self, learner_id: int, subject_id: int) -> bool:
        rows = self._fetch(
            "SELECT COUNT(*) FROM access_code_memberships WHERE user_id = ? AND subject_id = ?",
            ["count"],
            (learner_id, subject_id),
        )
        return rows[0]["count"] > 0

    # -------------------------------------------------------------------------
    # ResultSink
    # -------------------------------------------------------------------------

    def save_quiz_result(self, record: QuizResultRecord) -> None:
        self._execute(
            "INSERT INTO quiz_results (user_id, subject_id, skill_id, percentage, "
            "time_limit, used_time, timestamp) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                record.learner_id,
                record.subject_id,
                record.skill_id,
                record.percentage,
                record.time_limit,
                record.time_used,
                record.timestamp.isoformat(),
            ),
        )

    def save_question_result(self, record: QuestionResultRecord) -> None:
        self._execute(
            "INSERT INTO question_results (user_id, subject_id, skill_id, question_id, "
            "type, result, time_limit, time_used, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                record.learner_id,
                record.subject_id,
                record.skill_id,
                record.question_id,
                record.type.value,
                record.result,
                record.time_limit,
                record.time_used,
                record.timestamp.isoformat(),
            ),
        )

    def list_quiz_results(self, learner_id: int, skill_id: int) -> list[dict[str, Any]]:
        return self._fetch(
            "SELECT subject_id, percentage, time_limit, used_time, timestamp "
            "FROM quiz_results WHERE user_id = ? AND skill_id = ? ORDER BY quiz_result_id",
            ["subject_id", "percentage", "time_limit", "used_time", "timestamp"],
            (learner_id, skill_id),
        )

    def list_question_results(self, learner_id: int, skill_id: int) -> list[dict[str, Any]]:
        return self._fetch(
            "SELECT question_id, type, result, time_limit, time_used "
            "FROM question_results WHERE user_id = ? AND skill_id = ? "
            "ORDER BY question_result_id",
            ["question_id", "type", "result", "time_limit", "time_used"],
            (learner_id, skill_id),
        )

    # -------------------------------------------------------------------------
    # Seed (fixtures e ambiente de desenvolvimento)
    # -------------------------------------------------------------------------

    def insert_skill(self, skill_id: int, subject_id: int, skill_name: str = "") -> None:
        self._execute(
            "INSERT INTO skills (skill_id, subject_id, skill_name) VALUES (?, ?, ?)",
            (skill_id, subject_id, skill_name),
        )

    def insert_content(
        self,
        content_id: int,
        skill_id: int,
        question_type: QuestionType,
        order: int = 0,
        status: str = RecordStatus.ACTIVE.value,
        published_status: str = PublishedStatus.PUBLISHED.value,
    ) -> None:
        self._execute(
            'INSERT INTO content (content_id, skill_id, type, "order", status, published_status) '
            "VALUES (?, ?, ?, ?, ?, ?)",
            (content_id, skill_id, question_type.value, order, status, published_status),
        )

    def insert_question(
        self,
        question_type: QuestionType,
        question_id: int,
        content_id: int,
        subject_id: int,
        body: str = "",
        options: Optional[dict[str, str]] = None,
        answer: Optional[str] = None,
        feedback: Optional[str] = None,
        time_limit: Optional[int] = None,
        status: str = RecordStatus.ACTIVE.value,
        published_status: str = PublishedStatus.PUBLISHED.value,
    ) -> None:
        table = QUESTION_TABLES[question_type]
        values: dict[str, Any] = {
            "question_id": question_id,
            "content_id": content_id,
            "subject_id": subject_id,
            "feedback": feedback,
            "time_limit": time_limit,
            "status": status,
            "published_status": published_status,
            table.body_column: body,
        }
        for column in table.option_columns:
            values[column] = (options or {}).get(column)
        if table.has_answer:
            values["answer"] = answer

        placeholders = ", ".join("?" for _ in values)
        self._execute(
            f"INSERT INTO {table.name} ({', '.join(values)}) VALUES ({placeholders})",
            tuple(values.values()),
        )

    def grant_access(self, learner_id: int, subject_id: int) -> None:
        self._execute(
            "INSERT OR IGNORE INTO access_code_memberships (user_id, subject_id) VALUES (?, ?)",
            (learner_id, subject_id),
        )

    def check_health(self) -> dict[str, Any]:
        """Conta skills e questões publicadas (usado pelo /health)."""
        counts = {}
        for question_type, table in QUESTION_TABLES.items():
            rows = self._fetch(f"SELECT COUNT(*) FROM {table.name}", ["count"])
            counts[question_type.value] = rows[0]["count"]
        skills = self._fetch("SELECT COUNT(*) FROM skills", ["count"])[0]["count"]
        return {"skills": skills, "questions": counts}
