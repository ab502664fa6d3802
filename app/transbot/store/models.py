# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/14 00:45
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Per-group translation settings
"""
import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PRIMARY_LANG = "en"
DEFAULT_SECONDARY_LANG = "vi"
DEFAULT_ENABLED = True
DEFAULT_TRANSLATE_COMMANDS = False
DEFAULT_REPLY_WITH_VOICE = False


class ReplyStyle(str, Enum):
    REPLY = "reply"
    """
    Quote the source message
    """

    THREAD = "thread"
    """
    Post into the forum thread of the source message
    """

    INLINE = "inline"
    """
    Plain message in the chat
    """


class _CamelModel(BaseModel):
    # Stored payloads use camelCase keys (chatId, languagePair, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class LanguagePair(_CamelModel):
    primary: str = Field(
        default=DEFAULT_PRIMARY_LANG, min_length=1, description="ISO 639-1 code", examples=["en"]
    )
    secondary: str = Field(
        default=DEFAULT_SECONDARY_LANG, min_length=1, description="ISO 639-1 code", examples=["vi"]
    )

    def __str__(self) -> str:
        return f"{self.primary} ↔ {self.secondary}"


class GroupConfig(_CamelModel):
    chat_id: int = Field(description="Telegram chat id of the group")
    language_pair: LanguagePair = Field(default_factory=LanguagePair)
    enabled: bool = Field(default=DEFAULT_ENABLED, description="Translate inbound text and voice")
    translate_commands: bool = Field(
        default=DEFAULT_TRANSLATE_COMMANDS,
        description="Translate text starting with `/` that no command handler consumed",
    )
    reply_style: ReplyStyle = Field(default=ReplyStyle.REPLY)
    reply_with_voice: bool = Field(
        default=DEFAULT_REPLY_WITH_VOICE,
        description="Follow the text reply of a voice message with a synthesized voice note",
    )

    def dumps(self) -> str:
        return json.dumps(self.model_dump(mode="json", by_alias=True), ensure_ascii=False)

    @classmethod
    def loads(cls, payload: str | bytes, chat_id: int) -> "GroupConfig":
        """
        Decode a stored payload.

        The key the payload was stored under wins over any chatId inside it.

        Raises:
            ValueError: payload is not JSON or does not describe a GroupConfig
        """
        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        data["chatId"] = chat_id
        return cls.model_validate(data)


def default_group_config(chat_id: int) -> GroupConfig:
    """Settings a group has before anyone changes them. Pure, performs no I/O."""
    return GroupConfig(
        chat_id=chat_id,
        language_pair=LanguagePair(primary=DEFAULT_PRIMARY_LANG, secondary=DEFAULT_SECONDARY_LANG),
        enabled=DEFAULT_ENABLED,
        translate_commands=DEFAULT_TRANSLATE_COMMANDS,
        reply_style=ReplyStyle.REPLY,
        reply_with_voice=DEFAULT_REPLY_WITH_VOICE,
    )
