# -*- coding: utf-8 -*-
"""
Storage contract shared by every group config backend
"""
from abc import ABC, abstractmethod

from transbot.store.models import GroupConfig, default_group_config


class GroupConfigStore(ABC):
    """
    Async key-value contract keyed by chat id.

    * ``get`` never fails on absence, it falls back to :func:`default_group_config`
      without persisting anything.
    * ``set`` replaces the whole record atomically and raises
      :class:`~transbot.store.errors.PersistenceError` when the medium fails.
    * ``delete`` is idempotent.

    No per-key locking is done. Concurrent read-modify-write sequences on the same chat
    are last-write-wins.
    """

    backend_name: str = "abstract"

    @abstractmethod
    async def get(self, chat_id: int) -> GroupConfig:
        """Stored config of a chat, or its default when nothing is stored"""

    @abstractmethod
    async def set(self, chat_id: int, config: GroupConfig) -> None:
        """Persist the full config of a chat, replacing any prior value"""

    @abstractmethod
    async def delete(self, chat_id: int) -> None:
        """Forget the stored config of a chat"""

    def default_config(self, chat_id: int) -> GroupConfig:
        return default_group_config(chat_id)

    async def close(self) -> None:
        """Release the backend handle"""

    @staticmethod
    def _check_key(chat_id: int, config: GroupConfig) -> None:
        if not isinstance(config, GroupConfig):
            raise TypeError(f"Expected GroupConfig, got {type(config).__name__}")
        if config.chat_id != chat_id:
            raise ValueError(
                f"Config belongs to chat {config.chat_id}, refusing to store it under {chat_id}"
            )

    def __repr__(self):
        return f"<{type(self).__name__}(backend={self.backend_name})>"
