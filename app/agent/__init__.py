# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/7 05:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    :
"""
from .openai_client import TranslationAgent, AgentError
from .models import TranslationRequest, TranslationResponse

__all__ = ["TranslationAgent", "AgentError", "TranslationRequest", "TranslationResponse"]
