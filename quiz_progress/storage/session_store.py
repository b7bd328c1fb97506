"""Session Store - Abstração sobre o KV do AgentFS para sessões em andamento."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

from ..core.exceptions import TransientStoreError, ValidationError
from ..core.logger import get_logger
from ..models.enums import QuestionType
from ..models.state import SessionDocument, SessionKey
from .codec import SessionDocumentCodec

logger = get_logger("session_store")


class SessionStore:
    """Primitivas get/put/delete/scan sobre o KV store do AgentFS.

    Não existe update parcial: ``put`` sobrescreve o documento inteiro e
    qualquer alteração é read-modify-write do chamador (last-writer-wins).

    Estrutura de chaves:
        - {prefix}:{learner_id}_{skill_id} -> item tagueado (ver codec)

    Example:
        >>> store = SessionStore(agentfs)
        >>> key = SessionKey(learner_id=3489, skill_id=11)
        >>> await store.put(key, SessionDocument())
        >>> doc = await store.get(key)
    """

    KEY_PREFIX = "progress"

    def __init__(self, agentfs: AgentFS, key_prefix: str | None = None):
        """Inicializa store com instância do AgentFS.

        Args:
            agentfs: Instância configurada do AgentFS
            key_prefix: Namespace das chaves (default: ``progress``)
        """
        self.agentfs = agentfs
        self.key_prefix = key_prefix or self.KEY_PREFIX
        self.codec = SessionDocumentCodec

    def _store_key(self, key: SessionKey | str) -> str:
        """Gera chave do store para uma sessão."""
        return f"{self.key_prefix}:{key}"

    def _session_key_from_store(self, store_key: str) -> str | None:
        prefix = f"{self.key_prefix}:"
        if not store_key.startswith(prefix):
            return None
        return store_key[len(prefix):]

    async def get(self, key: SessionKey | str) -> SessionDocument | None:
        """Carrega documento da sessão.

        Returns:
            SessionDocument se encontrado, None caso contrário
        """
        store_key = self._store_key(key)
        try:
            item = await self.agentfs.kv.get(store_key)
        except Exception as e:
            raise TransientStoreError(f"Falha ao ler sessão {key}: {e}") from e

        if not item:
            logger.debug("Sessão não encontrada", key=str(key))
            return None

        return self.codec.decode_document(item)

    async def put(self, key: SessionKey | str, document: SessionDocument) -> None:
        """Sobrescreve o documento completo da sessão."""
        store_key = self._store_key(key)
        item = self.codec.encode_document(str(key), document)
        try:
            await self.agentfs.kv.set(store_key, item)
        except Exception as e:
            raise TransientStoreError(f"Falha ao gravar sessão {key}: {e}") from e

        logger.debug("Sessão salva", key=str(key), attempts=len(document))

    async def delete(self, key: SessionKey | str) -> None:
        """Remove a sessão do store."""
        store_key = self._store_key(key)
        try:
            await self.agentfs.kv.delete(store_key)
        except Exception as e:
            raise TransientStoreError(f"Falha ao remover sessão {key}: {e}") from e

        logger.debug("Sessão removida", key=str(key))

    async def exists(self, key: SessionKey | str) -> bool:
        return await self.get(key) is not None

    async def list_keys(self) -> list[str]:
        """Lista as chaves de sessão (sem prefixo) armazenadas."""
        prefix = f"{self.key_prefix}:"
        try:
            entries = await self.agentfs.kv.list(prefix=prefix)
        except Exception as e:
            raise TransientStoreError(f"Falha ao listar sessões: {e}") from e

        keys = []
        for entry in entries or []:
            store_key = entry.get("key", "") if isinstance(entry, dict) else str(entry)
            session_key = self._session_key_from_store(store_key)
            if session_key:
                keys.append(session_key)
        return keys

    async def scan_for_reference(self, question_id: int, question_type: QuestionType) -> bool:
        """Verifica se alguma sessão ativa referência a questão.

        Varre todos os documentos e todas as tentativas de cada um. O resultado
        é obsoleto assim que retorna: uma sessão nova pode ser criada logo
        depois.

        Args:
            question_id: ID da questão
            question_type: Tipo da questão

        Returns:
            True se algum documento contém (type, question_id)
        """
        for session_key in await self.list_keys():
            try:
                document = await self.get(session_key)
            except ValidationError as e:
                # Documento ilegível não referência nenhuma questão
                logger.warning("Sessão ilegível ignorada no scan", key=session_key, error=str(e))
                continue
            if document is None:
                # Finalizada entre o list e o get
                continue
            if document.references(question_type, question_id):
                logger.info(
                    "Questão referenciada por sessão ativa",
                    question_id=question_id,
                    type=question_type.value,
                    key=session_key,
                )
                return True
        return False
