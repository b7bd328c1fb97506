"""Core module - shared state and helper functions."""

from __future__ import annotations

import random
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from config import get_config
from quiz_progress.core.logger import get_logger

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

    from quiz_progress.bank.sqlite_bank import SQLiteBank
    from quiz_progress.engine.progress_engine import ProgressEngine

logger = get_logger("app_state")

# Global AgentFS (sessões em andamento) e banco relacional
agentfs: Optional[AgentFS] = None
bank: Optional[SQLiteBank] = None
engine: Optional[ProgressEngine] = None


async def get_agentfs() -> AgentFS:
    """Get AgentFS instance (opened lazily)."""
    global agentfs
    if agentfs is None:
        from agentfs_sdk import AgentFS, AgentFSOptions

        config = get_config()
        agentfs = await AgentFS.open(AgentFSOptions(id=config.agentfs_id))
        logger.info("AgentFS aberto", agentfs_id=config.agentfs_id)
    return agentfs


def get_bank() -> SQLiteBank:
    """Get SQLiteBank instance (creates schema on first open)."""
    global bank
    if bank is None:
        from quiz_progress.bank.sqlite_bank import SQLiteBank

        config = get_config()
        if config.db_path != ":memory:":
            Path(config.db_path).parent.mkdir(parents=True, exist_ok=True)
        bank = SQLiteBank(config.db_path)
    return bank


async def get_engine() -> ProgressEngine:
    """Get ProgressEngine wired to the shared AgentFS and bank."""
    global engine
    if engine is None:
        from quiz_progress.engine.progress_engine import ProgressEngine

        config = get_config()
        rng = random.Random(config.random_seed) if config.random_seed is not None else None
        engine = ProgressEngine(
            await get_agentfs(),
            get_bank(),
            key_prefix=config.session_key_prefix,
            rng=rng,
        )
    return engine


async def cleanup():
    """Cleanup resources on shutdown."""
    global agentfs, bank, engine
    engine = None
    if agentfs is not None:
        try:
            await agentfs.close()
            logger.info("AgentFS closed")
        except Exception as e:
            logger.warning("Error closing agentfs", error=str(e))
        agentfs = None
    if bank is not None:
        bank.close()
        bank = None
