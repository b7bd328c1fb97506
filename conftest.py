# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Ambiente de teste isolado: sem .env real, banco em memória, logs reduzidos
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_env():
    """Configura variáveis de ambiente e limpa o cache de config."""
    import config

    env_vars = {
        "AUTH_ENABLED": "false",
        "PROGRESS_DB_PATH": ":memory:",
        "AGENTFS_ID": "quiz-progress-test",
        "SESSION_KEY_PREFIX": "progress",
        "LOG_LEVEL": "ERROR",
    }
    with patch.dict(os.environ, env_vars):
        config._config = None
        yield
    config._config = None
