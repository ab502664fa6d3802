# -*- coding: utf-8 -*-
"""
Process-local store, lost on restart
"""
from typing import Dict

from transbot.store.base import GroupConfigStore
from transbot.store.models import GroupConfig


class MemoryGroupConfigStore(GroupConfigStore):
    backend_name = "memory"

    def __init__(self):
        self._records: Dict[int, GroupConfig] = {}

    async def get(self, chat_id: int) -> GroupConfig:
        config = self._records.get(chat_id)
        if config is not None:
            return config.model_copy(deep=True)
        return self.default_config(chat_id)

    async def set(self, chat_id: int, config: GroupConfig) -> None:
        self._check_key(chat_id, config)
        self._records[chat_id] = config.model_copy(deep=True)

    async def delete(self, chat_id: int) -> None:
        self._records.pop(chat_id, None)

    def __len__(self) -> int:
        return len(self._records)
