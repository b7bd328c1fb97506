# =============================================================================
# CONFIGURAÇÃO DO QUIZ PROGRESS - variáveis de ambiente
# =============================================================================

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = str(Path.cwd() / "data" / "progress.db")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class ProgressConfig:
    """Configuração do serviço.

    Attributes:
        db_path: Arquivo SQLite do banco de questões e resultados
        agentfs_id: ID da instância AgentFS que guarda as sessões
        session_key_prefix: Namespace das chaves de sessão no KV
        auth_enabled: Exige X-API-Key nas rotas
        api_key: Valor esperado de X-API-Key
        log_level: Nível de log
        random_seed: Semente fixa para a escolha de questões (testes/demos)
    """

    db_path: str = DEFAULT_DB_PATH
    agentfs_id: str = "quiz-progress"
    session_key_prefix: str = "progress"
    auth_enabled: bool = False
    api_key: Optional[str] = None
    log_level: str = "INFO"
    random_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "ProgressConfig":
        return cls(
            db_path=os.getenv("PROGRESS_DB_PATH", DEFAULT_DB_PATH),
            agentfs_id=os.getenv("AGENTFS_ID", "quiz-progress"),
            session_key_prefix=os.getenv("SESSION_KEY_PREFIX", "progress"),
            auth_enabled=_env_bool("AUTH_ENABLED", False),
            api_key=os.getenv("PROGRESS_API_KEY") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            random_seed=_env_int("QUIZ_RANDOM_SEED", None),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["api_key"]:
            data["api_key"] = "***"
        return data


_config: Optional[ProgressConfig] = None


def get_config() -> ProgressConfig:
    """Retorna configuração em cache (carrega .env na primeira chamada)."""
    global _config
    if _config is None:
        load_dotenv()
        _config = ProgressConfig.from_env()
    return _config


def reload_config() -> ProgressConfig:
    global _config
    _config = None
    return get_config()
