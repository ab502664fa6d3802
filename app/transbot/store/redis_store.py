# -*- coding: utf-8 -*-
"""
Redis backed store, one string key per group
"""
from redis.asyncio import Redis
from redis.exceptions import RedisError
from loguru import logger

from transbot.store.base import GroupConfigStore
from transbot.store.errors import PersistenceError
from transbot.store.models import GroupConfig


class RedisGroupConfigStore(GroupConfigStore):
    """
    Keys look like ``telegram:group:<chat_id>`` and hold the JSON record.

    Connection and server errors surface as PersistenceError. A payload that cannot be
    decoded is logged and read as "no record".
    """

    backend_name = "redis"

    def __init__(self, client: Redis, namespace: str = "telegram:group"):
        self._client = client
        self.namespace = namespace

    @classmethod
    def from_url(cls, url: str, namespace: str = "telegram:group") -> "RedisGroupConfigStore":
        # Values stay bytes, GroupConfig.loads decodes them
        client = Redis.from_url(url)
        return cls(client, namespace=namespace)

    def key_for(self, chat_id: int) -> str:
        return f"{self.namespace}:{chat_id}"

    async def get(self, chat_id: int) -> GroupConfig:
        key = self.key_for(chat_id)
        try:
            payload = await self._client.get(key)
        except UnicodeDecodeError as err:
            logger.warning(f"Ignoring undecodable payload at {key}: {err}")
            return self.default_config(chat_id)
        except RedisError as err:
            logger.error(f"Redis get error for group {chat_id}: {err}")
            raise PersistenceError(chat_id, self.backend_name, str(err)) from err

        if not payload:
            return self.default_config(chat_id)

        try:
            return GroupConfig.loads(payload, chat_id)
        except ValueError as err:
            logger.warning(f"Ignoring malformed payload at {key}: {err}")
            return self.default_config(chat_id)

    async def set(self, chat_id: int, config: GroupConfig) -> None:
        self._check_key(chat_id, config)
        try:
            await self._client.set(self.key_for(chat_id), config.dumps())
        except RedisError as err:
            logger.error(f"Redis set error for group {chat_id}: {err}")
            raise PersistenceError(chat_id, self.backend_name, str(err)) from err
        logger.debug(f"Set key: {self.key_for(chat_id)}")

    async def delete(self, chat_id: int) -> None:
        try:
            await self._client.delete(self.key_for(chat_id))
        except RedisError as err:
            logger.error(f"Redis delete error for group {chat_id}: {err}")
            raise PersistenceError(chat_id, self.backend_name, str(err)) from err

    async def close(self) -> None:
        await self._client.aclose()
