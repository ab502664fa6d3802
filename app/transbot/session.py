# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/14 00:11
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Binds a group's config to the update being processed
"""
from typing import Optional

from loguru import logger
from telegram import Update
from telegram.constants import ChatType
from telegram.ext import CallbackContext, ExtBot

from transbot.store import GroupConfig, GroupConfigStore, PersistenceError, default_group_config


class GroupContext(CallbackContext[ExtBot, dict, dict, dict]):
    """
    Callback context carrying the group config of the current update.

    One instance lives for exactly one update and is shared by every handler group,
    so a config bound in group -1 is visible to the command and message handlers.
    """

    def __init__(self, application, chat_id: Optional[int] = None, user_id: Optional[int] = None):
        super().__init__(application=application, chat_id=chat_id, user_id=user_id)
        self.conversation_id: Optional[int] = chat_id
        self.group_config: Optional[GroupConfig] = None


class SessionBinder:
    """
    Loads the config of a group into the update context and writes mutations back.

    The bound config is a request-scoped copy. It only becomes durable through
    :meth:`persist`; concurrent updates of the same chat are last-write-wins.
    """

    def __init__(self, store: GroupConfigStore):
        self.store = store

    async def bind(self, update: Update, context: GroupContext) -> None:
        """Run before every other handler (handler group -1)"""
        chat = update.effective_chat
        if not chat:
            logger.debug("No chat in update, skipping config load")
            return

        if chat.type == ChatType.PRIVATE:
            return

        context.conversation_id = chat.id
        try:
            context.group_config = await self.store.get(chat.id)
            logger.debug(f"Loaded config for chat {chat.id}: {context.group_config}")
        except PersistenceError as err:
            # Handlers fall back to ensure_config
            logger.error(f"Error loading config for chat {chat.id}: {err}")

    @staticmethod
    def ensure_config(context: GroupContext) -> GroupConfig:
        """Bound config of the update, or a fresh default attached in memory only"""
        if context.group_config is None:
            if context.conversation_id is None:
                raise RuntimeError("Update has no chat to build a group config for")
            context.group_config = default_group_config(context.conversation_id)
        return context.group_config

    async def load_config(self, context: GroupContext) -> GroupConfig:
        """
        Bound config, fetched again when :meth:`bind` could not load it.

        Raises:
            PersistenceError: the store is still unreachable
        """
        if context.group_config is None and context.conversation_id is not None:
            context.group_config = await self.store.get(context.conversation_id)
        return self.ensure_config(context)

    async def persist(self, context: GroupContext, config: GroupConfig) -> None:
        """
        Raises:
            PersistenceError: the store could not save the config
        """
        await self.store.set(config.chat_id, config)
        context.group_config = config
