# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/14 00:45
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Embedded SQLite store, one row per group
"""
import asyncio
from datetime import datetime, UTC
from pathlib import Path

from loguru import logger
from sqlalchemy import create_engine, event, Column, String, Text, DateTime, select, delete
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from transbot.store.base import GroupConfigStore
from transbot.store.errors import PersistenceError
from transbot.store.models import GroupConfig

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class GroupConfigRecord(Base):
    """Serialized GroupConfig keyed by chat id"""

    __tablename__ = "sessions"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<GroupConfigRecord(key={self.key})>"


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _configure_connection(dbapi_connection, connection_record):
    # Undecodable TEXT becomes U+FFFD and fails JSON parsing instead of the query
    dbapi_connection.text_factory = _decode_text
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=30000")
        cursor.execute("PRAGMA synchronous=NORMAL")
    finally:
        cursor.close()


class SqliteGroupConfigStore(GroupConfigStore):
    """
    Keeps the JSON record in the ``sessions`` table.

    WAL journaling lets readers proceed while a write is in flight. Each ``set`` is a
    single ``INSERT ... ON CONFLICT DO UPDATE`` committed in its own transaction.
    Blocking calls run in a worker thread.
    """

    backend_name = "sqlite"

    def __init__(self, database_url: str):
        self.database_url = database_url
        url = make_url(database_url)
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            database_url, pool_pre_ping=True, connect_args={"check_same_thread": False}
        )
        event.listen(self.engine, "connect", _configure_connection)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.init_database()

    def init_database(self):
        """Create the table if it does not exist yet"""
        try:
            Base.metadata.create_all(bind=self.engine)
            logger.success(f"Group config table ready at {self.engine.url}")
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize group config table: {e}")
            raise

    def get_db(self) -> Session:
        return self.SessionLocal()

    async def get(self, chat_id: int) -> GroupConfig:
        return await asyncio.to_thread(self._read, chat_id)

    async def set(self, chat_id: int, config: GroupConfig) -> None:
        self._check_key(chat_id, config)
        await asyncio.to_thread(self._upsert, chat_id, config.dumps())

    async def delete(self, chat_id: int) -> None:
        await asyncio.to_thread(self._delete, chat_id)

    async def close(self) -> None:
        await asyncio.to_thread(self.engine.dispose)

    def _read(self, chat_id: int) -> GroupConfig:
        db = self.get_db()
        try:
            payload = db.scalar(
                select(GroupConfigRecord.value).where(GroupConfigRecord.key == str(chat_id))
            )
        except SQLAlchemyError as e:
            logger.error(f"Error reading config for chat {chat_id}: {e}")
            raise PersistenceError(chat_id, self.backend_name, str(e)) from e
        finally:
            db.close()

        if payload is None:
            return self.default_config(chat_id)

        try:
            return GroupConfig.loads(payload, chat_id)
        except ValueError as e:
            logger.warning(f"Ignoring malformed row for chat {chat_id}: {e}")
            return self.default_config(chat_id)

    def _upsert(self, chat_id: int, payload: str) -> None:
        now = _utcnow()
        stmt = insert(GroupConfigRecord).values(
            key=str(chat_id), value=payload, created_at=now, updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[GroupConfigRecord.key],
            set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
        )

        db = self.get_db()
        try:
            db.execute(stmt)
            db.commit()
            logger.debug(f"Upserted config row for chat {chat_id}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error writing config for chat {chat_id}: {e}")
            raise PersistenceError(chat_id, self.backend_name, str(e)) from e
        finally:
            db.close()

    def _delete(self, chat_id: int) -> None:
        db = self.get_db()
        try:
            db.execute(delete(GroupConfigRecord).where(GroupConfigRecord.key == str(chat_id)))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting config for chat {chat_id}: {e}")
            raise PersistenceError(chat_id, self.backend_name, str(e)) from e
        finally:
            db.close()
