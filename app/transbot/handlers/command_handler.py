# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/9 00:44
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Group configuration commands
"""
import functools
from typing import Callable, Awaitable

from loguru import logger
from telegram import Update
from telegram.constants import ChatType

from transbot.prompts import (
    HELP_TPL,
    PRIVATE_WELCOME_TPL,
    GROUP_WELCOME_TPL,
    SHOW_CONFIG_TPL,
    SET_LANGUAGES_USAGE,
    GROUP_ONLY,
    COMMAND_FAILED,
)
from transbot.session import SessionBinder, GroupContext
from transbot.store import GroupConfig, LanguagePair, ReplyStyle, PersistenceError

CommandCallback = Callable[["GroupConfigCommands", Update, GroupContext], Awaitable[None]]


def _is_private(update: Update) -> bool:
    chat = update.effective_chat
    return chat is None or chat.type == ChatType.PRIVATE


def reply_on_store_error(func: CommandCallback) -> CommandCallback:
    """Tell the user the command failed instead of letting a store error escape"""

    @functools.wraps(func)
    async def wrapper(self, update: Update, context: GroupContext) -> None:
        try:
            await func(self, update, context)
        except PersistenceError as err:
            logger.error(f"Error in /{func.__name__} command: {err}")
            await update.effective_message.reply_text(COMMAND_FAILED)

    return wrapper


def group_only(func: CommandCallback) -> CommandCallback:
    @functools.wraps(func)
    async def wrapper(self, update: Update, context: GroupContext) -> None:
        if _is_private(update):
            await update.effective_message.reply_text(GROUP_ONLY)
            return
        await func(self, update, context)

    return wrapper


def format_config(config: GroupConfig) -> str:
    return SHOW_CONFIG_TPL.format(
        enabled=config.enabled,
        language_pair=config.language_pair,
        reply_style=config.reply_style.value,
        reply_with_voice=config.reply_with_voice,
        translate_commands=config.translate_commands,
    ).strip()


class GroupConfigCommands:
    """
    Every mutating command follows the same steps: take the bound config via
    ``load_config``, change it, persist it, then report the new value. When binding
    failed earlier the stored record is fetched again, so a toggle never starts from
    a synthesized default while a real record exists.
    """

    def __init__(self, binder: SessionBinder):
        self.binder = binder

    async def help(self, update: Update, context: GroupContext) -> None:
        await update.effective_message.reply_text(HELP_TPL.strip())

    @reply_on_store_error
    async def start(self, update: Update, context: GroupContext) -> None:
        if _is_private(update):
            await update.effective_message.reply_text(PRIVATE_WELCOME_TPL)
            return

        config = await self.binder.store.get(update.effective_chat.id)
        await update.effective_message.reply_text(
            GROUP_WELCOME_TPL.format(language_pair=config.language_pair)
        )

    @group_only
    @reply_on_store_error
    async def set_languages(self, update: Update, context: GroupContext) -> None:
        args = [arg.strip() for arg in (context.args or []) if arg.strip()]
        if len(args) != 2:
            await update.effective_message.reply_text(SET_LANGUAGES_USAGE)
            return

        primary, secondary = args
        config = await self.binder.load_config(context)
        config.language_pair = LanguagePair(primary=primary, secondary=secondary)
        await self.binder.persist(context, config)

        logger.info(f"Chat {config.chat_id} languages set to {config.language_pair}")
        await update.effective_message.reply_text(f"Languages set to: {config.language_pair}")

    @group_only
    @reply_on_store_error
    async def show_config(self, update: Update, context: GroupContext) -> None:
        config = await self.binder.load_config(context)
        await update.effective_message.reply_text(format_config(config))

    @group_only
    @reply_on_store_error
    async def enable(self, update: Update, context: GroupContext) -> None:
        config = await self.binder.load_config(context)
        if config.enabled:
            await update.effective_message.reply_text("Translation is already enabled.")
            return

        config.enabled = True
        await self.binder.persist(context, config)
        await update.effective_message.reply_text("Translation enabled.")

    @group_only
    @reply_on_store_error
    async def disable(self, update: Update, context: GroupContext) -> None:
        config = await self.binder.load_config(context)
        if not config.enabled:
            await update.effective_message.reply_text("Translation is already disabled.")
            return

        config.enabled = False
        await self.binder.persist(context, config)
        await update.effective_message.reply_text("Translation disabled.")

    @group_only
    @reply_on_store_error
    async def set_style(self, update: Update, context: GroupContext) -> None:
        raw_style = " ".join(context.args or []).strip().lower()
        try:
            style = ReplyStyle(raw_style)
        except ValueError:
            await update.effective_message.reply_text(
                "Invalid style. Use 'thread', 'reply', or 'inline'."
            )
            return

        config = await self.binder.load_config(context)
        config.reply_style = style
        await self.binder.persist(context, config)
        await update.effective_message.reply_text(f"Reply style set to: {style.value}")

    @group_only
    @reply_on_store_error
    async def toggle_reply_voice(self, update: Update, context: GroupContext) -> None:
        config = await self.binder.load_config(context)
        config.reply_with_voice = not config.reply_with_voice
        await self.binder.persist(context, config)

        state = "ENABLED" if config.reply_with_voice else "DISABLED"
        await update.effective_message.reply_text(f"Reply with voice is now {state}.")
