# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/14 00:45
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : One JSON file per group, survives restarts
"""
import asyncio
import os
import tempfile
from pathlib import Path

from loguru import logger

from transbot.store.base import GroupConfigStore
from transbot.store.errors import PersistenceError
from transbot.store.models import GroupConfig


class FileGroupConfigStore(GroupConfigStore):
    """
    Stores every group as ``<directory>/group_<chat_id>.json``.

    Writes go to a temporary file in the same directory that is then renamed over the
    target, so a reader sees either the old or the new record and a failed write keeps
    the old one. Missing or corrupt files read as "no record".
    """

    backend_name = "file"

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, chat_id: int) -> Path:
        return self.directory.joinpath(f"group_{chat_id}.json")

    async def get(self, chat_id: int) -> GroupConfig:
        return await asyncio.to_thread(self._read, chat_id)

    async def set(self, chat_id: int, config: GroupConfig) -> None:
        self._check_key(chat_id, config)
        await asyncio.to_thread(self._write, chat_id, config.dumps())

    async def delete(self, chat_id: int) -> None:
        await asyncio.to_thread(self._unlink, chat_id)

    def _read(self, chat_id: int) -> GroupConfig:
        path = self.path_for(chat_id)
        try:
            payload = path.read_bytes()
        except FileNotFoundError:
            return self.default_config(chat_id)
        except OSError as err:
            logger.error(f"Failed to read {path}: {err}")
            raise PersistenceError(chat_id, self.backend_name, str(err)) from err

        try:
            return GroupConfig.loads(payload, chat_id)
        except ValueError as err:
            logger.warning(f"Ignoring corrupt config file {path}: {err}")
            return self.default_config(chat_id)

    def _write(self, chat_id: int, payload: str) -> None:
        path = self.path_for(chat_id)
        tmp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.directory, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
            logger.debug(f"Saved config for chat {chat_id} to {path}")
        except OSError as err:
            logger.error(f"Failed to write {path}: {err}")
            raise PersistenceError(chat_id, self.backend_name, str(err)) from err
        finally:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)

    def _unlink(self, chat_id: int) -> None:
        path = self.path_for(chat_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as err:
            logger.error(f"Failed to delete {path}: {err}")
            raise PersistenceError(chat_id, self.backend_name, str(err)) from err
