# -*- coding: utf-8 -*-
"""
Group config persistence
"""
from .base import GroupConfigStore
from .errors import StoreError, PersistenceError, ConfigurationError
from .factory import StoreKind, create_store
from .models import GroupConfig, LanguagePair, ReplyStyle, default_group_config

__all__ = [
    "GroupConfigStore",
    "StoreError",
    "PersistenceError",
    "ConfigurationError",
    "StoreKind",
    "create_store",
    "GroupConfig",
    "LanguagePair",
    "ReplyStyle",
    "default_group_config",
]
