"""Session Document Codec - Codificação tipada dos valores no KV store.

Cada valor é gravado com a tag do seu tipo primitivo:

    - ``{"S": "texto"}``  string
    - ``{"N": "42"}``     número (carregado como string)
    - ``{"L": [...]}``    lista
    - ``{"M": {...}}``    mapa
    - ``{"NULL": True}``  null explícito

O null explícito é diferente de "campo ausente": ``result = 0`` (corrigida,
errada) precisa ser distinguível de ``result = None`` (não corrigida).

Formato de um item:

    {
        "key": {"S": "3489_11"},
        "results": {"L": [
            {"M": {"type": {"S": "studyNote"}, "question_id": {"N": "7"},
                   "result": {"NULL": True}, "time_used": {"NULL": True},
                   "time_limit": {"N": "30"}}},
        ]},
    }
"""

from typing import Any

from ..core.exceptions import ValidationError
from ..models.enums import QuestionType
from ..models.state import QuestionAttempt, SessionDocument

STRING = "S"
NUMBER = "N"
LIST = "L"
MAP = "M"
NULL = "NULL"


class SessionDocumentCodec:
    """Converte ``SessionDocument`` <-> item tagueado do store.

    Example:
        >>> item = SessionDocumentCodec.encode_document("1_2", doc)
        >>> SessionDocumentCodec.decode_document(item).attempts == doc.attempts
        True
    """

    # Tipo primitivo por atributo; atributos desconhecidos viram string
    ATTRIBUTE_KINDS = {
        "key": STRING,
        "type": STRING,
        "question_id": NUMBER,
        "result": NUMBER,
        "time_limit": NUMBER,
        "time_used": NUMBER,
        "results": LIST,
    }

    # -------------------------------------------------------------------------
    # Valores escalares
    # -------------------------------------------------------------------------

    @classmethod
    def encode_value(cls, attribute: str, value: Any) -> dict[str, Any]:
        """Aplica a tag do atributo ao valor."""
        if value is None:
            return {NULL: True}

        kind = cls.ATTRIBUTE_KINDS.get(attribute, STRING)
        if kind == LIST:
            return {LIST: list(value)}
        if isinstance(value, QuestionType):
            value = value.value
        return {kind: str(value)}

    @classmethod
    def decode_value(cls, attribute: str, tagged: dict[str, Any] | None) -> Any:
        """Remove a tag; retorna None para null explícito ou atributo ausente."""
        if not tagged or tagged.get(NULL):
            return None

        kind = cls.ATTRIBUTE_KINDS.get(attribute, STRING)
        if kind not in tagged:
            # Fallback: primeira tag presente
            kind = next(iter(tagged))

        raw = tagged[kind]
        if kind == NUMBER:
            return _parse_number(raw)
        return raw

    # -------------------------------------------------------------------------
    # Tentativas e documentos
    # -------------------------------------------------------------------------

    @classmethod
    def encode_attempt(cls, attempt: QuestionAttempt) -> dict[str, Any]:
        return {
            MAP: {
                "type": cls.encode_value("type", attempt.type),
                "question_id": cls.encode_value("question_id", attempt.question_id),
                "result": cls.encode_value("result", attempt.result),
                "time_used": cls.encode_value("time_used", attempt.time_used),
                "time_limit": cls.encode_value("time_limit", attempt.time_limit),
            }
        }

    @classmethod
    def decode_attempt(cls, tagged: dict[str, Any]) -> QuestionAttempt:
        fields = tagged.get(MAP, tagged)

        raw_type = cls.decode_value("type", fields.get("type"))
        try:
            question_type = QuestionType(raw_type)
        except ValueError as e:
            raise ValidationError(f"Unsupported question type in session: {raw_type!r}") from e

        question_id = cls.decode_value("question_id", fields.get("question_id"))
        if question_id is None:
            raise ValidationError("Session attempt without question_id")

        return QuestionAttempt(
            type=question_type,
            question_id=int(question_id),
            result=_optional_int(cls.decode_value("result", fields.get("result"))),
            time_limit=_optional_int(cls.decode_value("time_limit", fields.get("time_limit"))),
            time_used=_optional_int(cls.decode_value("time_used", fields.get("time_used"))),
        )

    @classmethod
    def encode_document(cls, key: str, document: SessionDocument) -> dict[str, Any]:
        return {
            "key": cls.encode_value("key", key),
            "results": cls.encode_value(
                "results", [cls.encode_attempt(a) for a in document.attempts]
            ),
        }

    @classmethod
    def decode_document(cls, item: dict[str, Any]) -> SessionDocument:
        entries = cls.decode_value("results", item.get("results")) or []
        return SessionDocument(attempts=[cls.decode_attempt(e) for e in entries])


def _parse_number(raw: Any) -> int | float:
    if isinstance(raw, (int, float)):
        return raw
    number = float(raw)
    return int(number) if number.is_integer() else number


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)
