# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/7 05:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Translation, transcription and speech synthesis over the OpenAI HTTP API
"""
from httpx import AsyncClient, AsyncBaseTransport, HTTPError
from loguru import logger

from agent.models import (
    TranslationRequest,
    TranslationResponse,
    ChatCompletionPayload,
    ChatMessage,
    SpeechPayload,
)
from agent.prompts import TRANSLATION_INSTRUCTIONS, TRANSLATION_PROMPT_TEMPLATE
from settings import settings

# The chat completion API does not report one
PLACEHOLDER_CONFIDENCE = 0.9


class AgentError(Exception):
    """The remote agent failed or returned nothing usable"""


class TranslationAgent:
    def __init__(
        self,
        api_key: str = settings.OPENAI_API_KEY.get_secret_value(),
        base_url: str = settings.OPENAI_BASE_URL,
        *,
        chat_model: str = settings.OPENAI_CHAT_MODEL,
        transcription_model: str = settings.OPENAI_TRANSCRIPTION_MODEL,
        speech_model: str = settings.OPENAI_SPEECH_MODEL,
        speech_voice: str = settings.OPENAI_SPEECH_VOICE,
        timeout: float = settings.AGENT_REQUEST_TIMEOUT,
        transport: AsyncBaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {api_key}"}
        self._client = AsyncClient(
            base_url=base_url, headers=headers, timeout=timeout, transport=transport
        )
        self.chat_model = chat_model
        self.transcription_model = transcription_model
        self.speech_model = speech_model
        self.speech_voice = speech_voice

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """
        Translate ``request.text``.

        Never raises. A failed call comes back as ``[Translation Error: ...]`` with
        confidence 0 so callers can gate on confidence alone.
        """
        logger.debug(
            f"Attempting translation {request.source_language} -> {request.target_language} "
            f"for chat {request.group_id}"
        )
        prompt = TRANSLATION_PROMPT_TEMPLATE.format(
            source_language=request.source_language,
            target_language=request.target_language,
            text=request.text,
        )
        payload = ChatCompletionPayload(
            model=self.chat_model,
            messages=[
                ChatMessage(role="system", content=TRANSLATION_INSTRUCTIONS),
                ChatMessage(role="user", content=prompt),
            ],
        )

        try:
            response = await self._client.post(
                "/chat/completions", json=payload.model_dump(mode="json")
            )
            response.raise_for_status()
            result = response.json()
            text = (result["choices"][0]["message"]["content"] or "").strip()
            if not text:
                raise AgentError("Agent did not return translated text.")
        except (HTTPError, AgentError, KeyError, IndexError, TypeError, ValueError) as err:
            logger.error(f"Translation failed: {err}")
            return TranslationResponse(
                translated_text=f"[Translation Error: {str(err) or 'Unknown error'}]",
                detected_language=request.source_language,
                confidence=0,
            )

        return TranslationResponse(
            translated_text=text,
            detected_language=request.source_language,
            confidence=PLACEHOLDER_CONFIDENCE,
        )

    async def transcribe(self, audio: bytes, filename: str = "voice.ogg") -> str:
        """
        Raises:
            AgentError: the transcription call failed or returned no text
        """
        logger.debug(f"Attempting transcription of {len(audio)} bytes")
        data = {"model": self.transcription_model}
        files = {"file": (filename, audio, "audio/ogg")}
        try:
            response = await self._client.post("/audio/transcriptions", data=data, files=files)
            response.raise_for_status()
            text = response.json().get("text")
        except (HTTPError, ValueError) as err:
            logger.error(f"Transcription failed: {err}")
            raise AgentError(f"Transcription Error: {err}") from err

        if not isinstance(text, str):
            raise AgentError("Agent did not return transcription text.")
        return text

    async def synthesize(self, text: str) -> bytes:
        """
        Speak ``text`` as OGG/Opus, the container Telegram voice notes use.

        Raises:
            AgentError: the speech call failed or returned no audio
        """
        payload = SpeechPayload(model=self.speech_model, input=text, voice=self.speech_voice)
        try:
            response = await self._client.post("/audio/speech", json=payload.model_dump())
            response.raise_for_status()
        except HTTPError as err:
            logger.error(f"Text-to-speech failed: {err}")
            raise AgentError(f"Text-to-speech Error: {err}") from err

        if not response.content:
            raise AgentError("Agent did not return audio.")
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()
