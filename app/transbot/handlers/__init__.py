# -*- coding: utf-8 -*-

from .command_handler import GroupConfigCommands
from .message_handler import TranslationHandlers

__all__ = ["GroupConfigCommands", "TranslationHandlers"]
