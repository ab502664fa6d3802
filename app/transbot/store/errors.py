# -*- coding: utf-8 -*-
"""
Exceptions raised by the group config storage layer
"""


class StoreError(Exception):
    """Base class for storage layer errors"""


class PersistenceError(StoreError):
    """
    The underlying medium (disk, network, database) failed a store operation.

    The previously durable value of the key is left untouched.
    """

    def __init__(self, chat_id: int, backend: str, message: str = ""):
        self.chat_id = chat_id
        self.backend = backend
        detail = f": {message}" if message else ""
        super().__init__(f"[{backend}] store operation failed for chat {chat_id}{detail}")


class ConfigurationError(StoreError):
    """An unknown storage backend was requested at startup"""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown store backend: {kind!r}")
