# -*- coding: utf-8 -*-
"""
Relaying group text and voice messages through the translation agent
"""
from unittest.mock import AsyncMock, Mock

import pytest
from telegram import Voice, File
from telegram.constants import ChatAction, ChatType

from agent import AgentError, TranslationAgent, TranslationRequest, TranslationResponse
from conftest import GROUP_CHAT_ID, make_context, make_update
from transbot.handlers import TranslationHandlers
from transbot.prompts import LOW_CONFIDENCE, VOICE_FAILED, VOICE_REPLY_FAILED
from transbot.session import SessionBinder
from transbot.store import ReplyStyle, default_group_config
from transbot.store.memory_store import MemoryGroupConfigStore


def translated(text: str, confidence: float = 0.9) -> TranslationResponse:
    return TranslationResponse(translated_text=text, detected_language="en", confidence=confidence)


@pytest.fixture
def store():
    return MemoryGroupConfigStore()


@pytest.fixture
def agent():
    agent = AsyncMock(spec=TranslationAgent)
    agent.translate.return_value = translated("xin chào")
    return agent


@pytest.fixture
def handlers(store, agent):
    return TranslationHandlers(SessionBinder(store), agent)


async def dispatch(handlers, update, config=None):
    """Bind like the dispatcher would, optionally after storing ``config``"""
    if config is not None:
        await handlers.binder.store.set(config.chat_id, config)
    context = make_context(chat_id=update.effective_chat.id)
    await handlers.binder.bind(update, context)
    return context


class TestHandleText:
    @pytest.mark.asyncio
    async def test_ascii_text_goes_primary_to_secondary(self, handlers, agent):
        update = make_update(text="hello")
        context = await dispatch(handlers, update)

        await handlers.handle_text(update, context)

        agent.translate.assert_awaited_once_with(
            TranslationRequest(
                text="hello", source_language="en", target_language="vi", group_id=GROUP_CHAT_ID
            )
        )
        context.bot.send_chat_action.assert_awaited_once_with(
            chat_id=GROUP_CHAT_ID, action=ChatAction.TYPING
        )
        update.effective_message.reply_text.assert_awaited_once_with(
            "@alice: xin chào", do_quote=True
        )

    @pytest.mark.asyncio
    async def test_non_ascii_text_goes_secondary_to_primary(self, handlers, agent):
        update = make_update(text="xin chào")
        context = await dispatch(handlers, update)

        await handlers.handle_text(update, context)

        request = agent.translate.await_args.args[0]
        assert (request.source_language, request.target_language) == ("vi", "en")

    @pytest.mark.asyncio
    async def test_disabled_group_is_ignored(self, handlers, agent):
        config = default_group_config(GROUP_CHAT_ID)
        config.enabled = False
        update = make_update()
        context = await dispatch(handlers, update, config)

        await handlers.handle_text(update, context)

        agent.translate.assert_not_awaited()
        update.effective_message.reply_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_private_chat_is_ignored(self, handlers, agent):
        update = make_update(chat_id=456789, chat_type=ChatType.PRIVATE)
        context = await dispatch(handlers, update)

        await handlers.handle_text(update, context)

        agent.translate.assert_not_awaited()
        assert context.group_config is None

    @pytest.mark.asyncio
    async def test_commands_are_not_translated_by_default(self, handlers, agent):
        update = make_update(text="/unknown do something")
        context = await dispatch(handlers, update)

        await handlers.handle_text(update, context)

        agent.translate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commands_are_translated_when_configured(self, handlers, agent):
        config = default_group_config(GROUP_CHAT_ID)
        config.translate_commands = True
        update = make_update(text="/unknown do something")
        context = await dispatch(handlers, update, config)

        await handlers.handle_text(update, context)

        agent.translate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_zero_confidence_stays_silent(self, handlers, agent):
        agent.translate.return_value = translated("[Translation Error: boom]", confidence=0)
        update = make_update()
        context = await dispatch(handlers, update)

        await handlers.handle_text(update, context)

        update.effective_message.reply_text.assert_not_awaited()
        context.bot.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_username_falls_back(self, handlers):
        update = make_update(username=None)
        context = await dispatch(handlers, update)

        await handlers.handle_text(update, context)

        assert update.effective_message.reply_text.await_args.args[0] == "@User: xin chào"

    @pytest.mark.asyncio
    async def test_thread_style_posts_into_topic(self, handlers):
        config = default_group_config(GROUP_CHAT_ID)
        config.reply_style = ReplyStyle.THREAD
        update = make_update()
        update.effective_message.message_thread_id = 77
        context = await dispatch(handlers, update, config)

        await handlers.handle_text(update, context)

        update.effective_message.reply_text.assert_awaited_once_with(
            "@alice: xin chào", do_quote=False, message_thread_id=77
        )

    @pytest.mark.asyncio
    async def test_inline_style_sends_plain_message(self, handlers):
        config = default_group_config(GROUP_CHAT_ID)
        config.reply_style = ReplyStyle.INLINE
        update = make_update()
        context = await dispatch(handlers, update, config)

        await handlers.handle_text(update, context)

        context.bot.send_message.assert_awaited_once_with(
            chat_id=GROUP_CHAT_ID, text="@alice: xin chào"
        )
        update.effective_message.reply_text.assert_not_awaited()


class TestHandleVoice:
    @pytest.fixture
    def voice_update(self):
        update = make_update(text=None)
        voice_file = AsyncMock(spec=File)
        voice_file.download_as_bytearray.return_value = bytearray(b"OggS-voice")
        voice = Mock(spec=Voice)
        voice.get_file = AsyncMock(return_value=voice_file)
        update.effective_message.voice = voice
        return update

    @pytest.mark.asyncio
    async def test_voice_is_transcribed_and_translated(self, handlers, agent, voice_update):
        agent.transcribe.return_value = "good morning"
        agent.translate.return_value = translated("chào buổi sáng")
        context = await dispatch(handlers, voice_update)

        await handlers.handle_voice(voice_update, context)

        agent.transcribe.assert_awaited_once_with(b"OggS-voice")
        request = agent.translate.await_args.args[0]
        assert request.text == "good morning"
        assert (request.source_language, request.target_language) == ("en", "vi")
        voice_update.effective_message.reply_text.assert_awaited_once_with(
            "@alice (🎤→vi): chào buổi sáng", do_quote=True
        )
        agent.synthesize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_voice_reply_when_enabled(self, handlers, agent, voice_update):
        agent.transcribe.return_value = "good morning"
        agent.synthesize.return_value = b"OggS-reply"
        config = default_group_config(GROUP_CHAT_ID)
        config.reply_with_voice = True
        context = await dispatch(handlers, voice_update, config)

        await handlers.handle_voice(voice_update, context)

        agent.synthesize.assert_awaited_once_with("xin chào")
        context.bot.send_chat_action.assert_any_await(
            chat_id=GROUP_CHAT_ID, action=ChatAction.RECORD_VOICE
        )
        voice_update.effective_message.reply_voice.assert_awaited_once()
        sent = voice_update.effective_message.reply_voice.await_args.kwargs["voice"]
        assert sent.filename.startswith("translation-")
        assert sent.filename.endswith(".ogg")

    @pytest.mark.asyncio
    async def test_synthesis_failure_is_reported(self, handlers, agent, voice_update):
        agent.transcribe.return_value = "good morning"
        agent.synthesize.side_effect = AgentError("Text-to-speech Error: 500")
        config = default_group_config(GROUP_CHAT_ID)
        config.reply_with_voice = True
        context = await dispatch(handlers, voice_update, config)

        await handlers.handle_voice(voice_update, context)

        voice_update.effective_message.reply_text.assert_awaited_with(
            VOICE_REPLY_FAILED, do_quote=True
        )

    @pytest.mark.asyncio
    async def test_low_confidence_is_reported(self, handlers, agent, voice_update):
        agent.transcribe.return_value = "mmm"
        agent.translate.return_value = translated("", confidence=0)
        context = await dispatch(handlers, voice_update)

        await handlers.handle_voice(voice_update, context)

        voice_update.effective_message.reply_text.assert_awaited_once_with(
            LOW_CONFIDENCE, do_quote=True
        )

    @pytest.mark.asyncio
    async def test_transcription_failure_is_reported(self, handlers, agent, voice_update):
        agent.transcribe.side_effect = AgentError("Transcription Error: 503")
        context = await dispatch(handlers, voice_update)

        await handlers.handle_voice(voice_update, context)

        agent.translate.assert_not_awaited()
        voice_update.effective_message.reply_text.assert_awaited_once_with(
            VOICE_FAILED, do_quote=True
        )

    @pytest.mark.asyncio
    async def test_disabled_group_is_ignored(self, handlers, agent, voice_update):
        config = default_group_config(GROUP_CHAT_ID)
        config.enabled = False
        context = await dispatch(handlers, voice_update, config)

        await handlers.handle_voice(voice_update, context)

        voice_update.effective_message.voice.get_file.assert_not_awaited()
        agent.transcribe.assert_not_awaited()
