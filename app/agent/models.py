# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/7 05:41
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Translation agent payloads
"""
from typing import List, Literal

from pydantic import BaseModel, Field


class TranslationRequest(BaseModel):
    text: str
    source_language: str = Field(description="ISO 639-1 code", examples=["en"])
    target_language: str = Field(description="ISO 639-1 code", examples=["vi"])
    group_id: int = Field(default=0, description="Telegram chat id the text came from")


class TranslationResponse(BaseModel):
    translated_text: str
    detected_language: str
    confidence: float = Field(ge=0, le=1)

    @property
    def is_usable(self) -> bool:
        return bool(self.translated_text) and self.confidence > 0


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionPayload(BaseModel):
    model: str
    messages: List[ChatMessage]
    temperature: float | None = 0


class SpeechPayload(BaseModel):
    model: str
    input: str
    voice: str
    response_format: Literal["opus", "mp3", "aac", "flac", "wav", "pcm"] = "opus"
