# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/14 00:15
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Translation direction for a group's language pair
"""
from typing import Tuple

from transbot.store import LanguagePair


def contains_non_ascii(text: str) -> bool:
    return any(ord(ch) > 127 for ch in text)


def resolve_direction(text: str, pair: LanguagePair) -> Tuple[str, str]:
    """
    Guess (source, target) for a message.

    Any character above the ASCII range marks the text as written in the secondary
    language. This is a placeholder, not a language detector.
    """
    if contains_non_ascii(text):
        return pair.secondary, pair.primary
    return pair.primary, pair.secondary
