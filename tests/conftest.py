# -*- coding: utf-8 -*-
"""
Shared fixtures: one harness per storage backend plus Telegram doubles
"""
from typing import Callable, Dict
from unittest.mock import AsyncMock, Mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from telegram import Update, Message, Chat, User
from telegram.constants import ChatType

from transbot.session import GroupContext
from transbot.store import GroupConfigStore
from transbot.store.file_store import FileGroupConfigStore
from transbot.store.memory_store import MemoryGroupConfigStore
from transbot.store.redis_store import RedisGroupConfigStore
from transbot.store.sqlite_store import SqliteGroupConfigStore

GROUP_CHAT_ID = -1001234567890


class FakeRedisClient:
    """Dict backed stand-in for the three redis.asyncio calls the store makes"""

    def __init__(self, data: Dict[str, str] | None = None):
        self.data = {} if data is None else data
        self.available = True
        self.closed = False

    def _check(self):
        if not self.available:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value):
        self._check()
        self.data[key] = value
        return True

    async def delete(self, *keys):
        self._check()
        return sum(1 for key in keys if self.data.pop(key, None) is not None)

    async def aclose(self):
        self.closed = True


class BackendHarness:
    """Opens handles on one storage medium; every handle sees the same durable state"""

    def __init__(self, name: str, opener: Callable[[], GroupConfigStore], durable: bool):
        self.name = name
        self.durable = durable
        self._opener = opener
        self.opened = []

    def open(self) -> GroupConfigStore:
        store = self._opener()
        self.opened.append(store)
        return store

    def dispose(self):
        for store in self.opened:
            if isinstance(store, SqliteGroupConfigStore):
                store.engine.dispose()


@pytest.fixture(params=["memory", "file", "redis", "sqlite"])
def backend(request, tmp_path):
    """Each contract test runs once per backend"""
    name = request.param
    if name == "memory":
        harness = BackendHarness(name, MemoryGroupConfigStore, durable=False)
    elif name == "file":
        harness = BackendHarness(
            name, lambda: FileGroupConfigStore(tmp_path.joinpath("sessions")), durable=True
        )
    elif name == "redis":
        shared: Dict[str, str] = {}
        harness = BackendHarness(
            name, lambda: RedisGroupConfigStore(FakeRedisClient(shared)), durable=True
        )
    else:
        url = f"sqlite:///{tmp_path.joinpath('bot.db')}"
        harness = BackendHarness(name, lambda: SqliteGroupConfigStore(url), durable=True)

    yield harness
    harness.dispose()


@pytest.fixture
def store(backend) -> GroupConfigStore:
    return backend.open()


def make_update(
    chat_id: int = GROUP_CHAT_ID,
    chat_type: str = ChatType.SUPERGROUP,
    text: str | None = "hello",
    username: str | None = "alice",
    message_id: int = 42,
) -> Update:
    update = AsyncMock(spec=Update)

    chat = Mock(spec=Chat)
    chat.id = chat_id
    chat.type = chat_type

    user = Mock(spec=User)
    user.id = 456789
    user.is_bot = False
    user.username = username

    message = AsyncMock(spec=Message)
    message.message_id = message_id
    message.message_thread_id = None
    message.chat = chat
    message.chat_id = chat_id
    message.text = text
    message.voice = None
    message.from_user = user

    update.effective_chat = chat
    update.effective_user = user
    update.effective_message = message
    update.message = message
    return update


def make_context(chat_id: int | None = GROUP_CHAT_ID, args=None) -> GroupContext:
    application = Mock()
    application.bot = AsyncMock()
    context = GroupContext(application, chat_id=chat_id, user_id=456789)
    context.args = args
    return context
