"""Progress Storage - KV store de sessões e codec."""

from .codec import SessionDocumentCodec
from .session_store import SessionStore

__all__ = ["SessionStore", "SessionDocumentCodec"]
