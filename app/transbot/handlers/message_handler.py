# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/12 10:00
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Relays group text and voice messages through the translation agent
"""
import time

from loguru import logger
from telegram import Update, Message, InputFile
from telegram.constants import ChatAction, ChatType
from telegram.error import TelegramError

from agent import TranslationAgent, TranslationRequest, AgentError
from transbot.language import resolve_direction
from transbot.prompts import VOICE_FAILED, VOICE_REPLY_FAILED, LOW_CONFIDENCE
from transbot.session import SessionBinder, GroupContext
from transbot.store import GroupConfig, ReplyStyle
from utils import display_username

COMMAND_PREFIX = "/"


class TranslationHandlers:
    def __init__(self, binder: SessionBinder, agent: TranslationAgent):
        self.binder = binder
        self.agent = agent

    def _active_config(self, update: Update, context: GroupContext) -> GroupConfig | None:
        """Config of a group with translation turned on, None otherwise"""
        chat = update.effective_chat
        if not chat or chat.type == ChatType.PRIVATE:
            return None

        config = self.binder.ensure_config(context)
        if not config.enabled:
            logger.debug(f"Message ignored in chat {chat.id} - translation disabled")
            return None
        return config

    async def handle_text(self, update: Update, context: GroupContext) -> None:
        message = update.effective_message
        if not message or not message.text:
            return

        config = self._active_config(update, context)
        if config is None:
            return

        text = message.text
        if text.startswith(COMMAND_PREFIX) and not config.translate_commands:
            logger.debug(f"Ignoring command in message handler: {text}")
            return

        source_lang, target_lang = resolve_direction(text, config.language_pair)

        await context.bot.send_chat_action(chat_id=config.chat_id, action=ChatAction.TYPING)
        response = await self.agent.translate(
            TranslationRequest(
                text=text,
                source_language=source_lang,
                target_language=target_lang,
                group_id=config.chat_id,
            )
        )

        if not response.is_usable:
            logger.info(
                f"Translation failed or confidence too low for message {message.message_id}: "
                f"{response.translated_text}"
            )
            return

        username = display_username(message.from_user.username if message.from_user else None)
        reply_text = f"@{username}: {response.translated_text}"
        await self.deliver(context, message, config.reply_style, reply_text)

    @staticmethod
    async def deliver(
        context: GroupContext, message: Message, style: ReplyStyle, text: str
    ) -> None:
        match style:
            case ReplyStyle.THREAD:
                await message.reply_text(
                    text, do_quote=False, message_thread_id=message.message_thread_id
                )
            case ReplyStyle.INLINE:
                await context.bot.send_message(chat_id=message.chat_id, text=text)
            case _:
                await message.reply_text(text, do_quote=True)

    async def handle_voice(self, update: Update, context: GroupContext) -> None:
        message = update.effective_message
        if not message or not message.voice:
            return

        config = self._active_config(update, context)
        if config is None:
            return

        logger.info(f"Processing voice message {message.message_id} in chat {config.chat_id}")
        try:
            await context.bot.send_chat_action(chat_id=config.chat_id, action=ChatAction.TYPING)

            voice_file = await message.voice.get_file()
            audio = bytes(await voice_file.download_as_bytearray())

            transcription = await self.agent.transcribe(audio)
            logger.debug(f"Transcription for message {message.message_id}: {transcription}")

            source_lang, target_lang = resolve_direction(transcription, config.language_pair)
            logger.debug(f"Detected voice language direction: {source_lang} -> {target_lang}")

            response = await self.agent.translate(
                TranslationRequest(
                    text=transcription,
                    source_language=source_lang,
                    target_language=target_lang,
                    group_id=config.chat_id,
                )
            )

            if not response.is_usable:
                logger.info(
                    f"Translation failed or confidence too low for voice message {message.message_id}"
                )
                await message.reply_text(LOW_CONFIDENCE, do_quote=True)
                return

            username = display_username(message.from_user.username if message.from_user else None)
            await message.reply_text(
                f"@{username} (🎤→{target_lang}): {response.translated_text}", do_quote=True
            )

            if config.reply_with_voice:
                await self.reply_with_voice(context, message, response.translated_text)

        except Exception as err:
            logger.exception(
                f"Error processing voice message {message.message_id} in chat {config.chat_id}: {err}"
            )
            await message.reply_text(VOICE_FAILED, do_quote=True)

    async def reply_with_voice(self, context: GroupContext, message: Message, text: str) -> None:
        logger.debug(f"Generating voice reply for message {message.message_id}")
        await context.bot.send_chat_action(chat_id=message.chat_id, action=ChatAction.RECORD_VOICE)
        try:
            audio = await self.agent.synthesize(text)
            filename = f"translation-{int(time.time() * 1000)}.ogg"
            await message.reply_voice(voice=InputFile(audio, filename=filename), do_quote=True)
        except (AgentError, TelegramError) as err:
            logger.error(f"Failed to generate or send voice reply: {err}")
            await message.reply_text(VOICE_REPLY_FAILED, do_quote=True)
