"""Logger - Logging estruturado sobre o módulo logging padrão.

Permite passar campos como kwargs:

    >>> logger = get_logger("grading")
    >>> logger.info("Resposta avaliada", question_id=12, result=1)
"""

import logging
import os
from typing import Any

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    root = logging.getLogger("quiz_progress")
    root.setLevel(level)
    if not root.handlers:
        root.addHandler(handler)
    root.propagate = False
    _configured = True


class StructuredLogger:
    """Wrapper que formata kwargs como pares chave=valor."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @staticmethod
    def _format(message: str, fields: dict[str, Any]) -> str:
        if not fields:
            return message
        extra = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{message} | {extra}"

    def debug(self, message: str, **fields: Any) -> None:
        self._logger.debug(self._format(message, fields))

    def info(self, message: str, **fields: Any) -> None:
        self._logger.info(self._format(message, fields))

    def warning(self, message: str, **fields: Any) -> None:
        self._logger.warning(self._format(message, fields))

    def error(self, message: str, **fields: Any) -> None:
        self._logger.error(self._format(message, fields))


def set_level(level: str) -> None:
    """Ajusta o nível de todos os loggers do pacote (ex: após carregar .env)."""
    _configure_root()
    logging.getLogger("quiz_progress").setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> StructuredLogger:
    """Retorna logger estruturado filho de ``quiz_progress``."""
    _configure_root()
    return StructuredLogger(logging.getLogger(f"quiz_progress.{name}"))
