"""Progress Enums - Tipos de questão e status de publicação."""

from enum import Enum


class QuestionType(str, Enum):
    """Tipos de questão do banco (valores iguais aos gravados no store)."""

    MULTICHOICE = "multichoiceQuestion"
    MATCHING = "matchingQuestion"
    NUMERICAL = "numericalQuestion"
    STUDY_NOTE = "studyNote"


class RecordStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PublishedStatus(str, Enum):
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"
