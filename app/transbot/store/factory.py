# -*- coding: utf-8 -*-
"""
Pick the group config backend at startup
"""
from enum import Enum

from loguru import logger

from settings import settings
from transbot.store.base import GroupConfigStore
from transbot.store.errors import ConfigurationError


class StoreKind(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"
    SQLITE = "sqlite"


_ALIASES = {"redis-like-kv": StoreKind.REDIS, "embedded-db": StoreKind.SQLITE}


def parse_store_kind(kind: str | StoreKind) -> StoreKind:
    if isinstance(kind, StoreKind):
        return kind
    normalized = str(kind).strip().lower()
    if normalized in _ALIASES:
        return _ALIASES[normalized]
    try:
        return StoreKind(normalized)
    except ValueError:
        raise ConfigurationError(str(kind)) from None


def create_store(kind: str | StoreKind | None = None) -> GroupConfigStore:
    """
    Build the backend named by ``kind``, or by the STORE_BACKEND setting when omitted.

    Raises:
        ConfigurationError: ``kind`` names no known backend
    """
    store_kind = parse_store_kind(settings.STORE_BACKEND if kind is None else kind)

    match store_kind:
        case StoreKind.MEMORY:
            from transbot.store.memory_store import MemoryGroupConfigStore

            store = MemoryGroupConfigStore()
        case StoreKind.FILE:
            from transbot.store.file_store import FileGroupConfigStore

            store = FileGroupConfigStore(settings.FILE_STORE_DIR)
        case StoreKind.REDIS:
            from transbot.store.redis_store import RedisGroupConfigStore

            store = RedisGroupConfigStore.from_url(
                settings.REDIS_URL, namespace=settings.REDIS_KEY_NAMESPACE
            )
        case StoreKind.SQLITE:
            from transbot.store.sqlite_store import SqliteGroupConfigStore

            store = SqliteGroupConfigStore(settings.SQLITE_DATABASE_URL)

    logger.info(f"Using {store!r} for group configs")
    return store
