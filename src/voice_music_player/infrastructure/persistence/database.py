"""SQLite access for the session store.

Every operation opens its own short-lived aiosqlite connection in WAL mode, so
no connection is shared between concurrent engine calls. ``:memory:``
databases are mapped to a named shared-cache URI and pinned by one keepalive
connection for the lifetime of the manager.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiosqlite

from voice_music_player.domain.shared.constants import SQLPragmas
from voice_music_player.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...config.settings import DatabaseSettings

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS playback_sessions (
        user_id TEXT PRIMARY KEY,
        queue TEXT NOT NULL DEFAULT '[]',
        queue_length INTEGER NOT NULL DEFAULT 0,
        position INTEGER NOT NULL DEFAULT 0,
        offset_ms INTEGER NOT NULL DEFAULT 0,
        cursor TEXT,
        looping INTEGER NOT NULL DEFAULT 0,
        shuffle INTEGER NOT NULL DEFAULT 0,
        mode TEXT NOT NULL DEFAULT 'track_list',
        updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now'))
    )
    """,
)

Params = tuple[Any, ...] | None


def _path_from_url(url: str) -> str:
    """``sqlite:///data/x.db`` -> ``data/x.db``; plain paths pass through."""
    prefix = "sqlite:///"
    return url[len(prefix) :] if url.startswith(prefix) else url


class Database:
    def __init__(self, url: str, settings: DatabaseSettings | None = None) -> None:
        self._db_path = _path_from_url(url)
        self._busy_timeout_ms = settings.busy_timeout_ms if settings else 5000
        self._connect_timeout_s = settings.connection_timeout_s if settings else 10
        self._keepalive: aiosqlite.Connection | None = None
        self._initialized = False

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_memory(self) -> bool:
        return self._db_path == MEMORY

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Create the schema. Safe to call more than once."""
        if self._initialized:
            return

        if self.is_memory:
            # The shared in-memory database lives only while a connection is open.
            if self._keepalive is None:
                self._keepalive = await self._open()
        else:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        async with self.transaction() as conn:
            for statement in _SCHEMA:
                await conn.execute(statement)

        self._initialized = True
        logger.info(LogTemplates.DATABASE_INITIALIZED, self._db_path)

    async def _open(self) -> aiosqlite.Connection:
        if self.is_memory:
            target, uri = f"file:voice-music-player-{id(self)}?mode=memory&cache=shared", True
        else:
            target, uri = self._db_path, False

        conn = await aiosqlite.connect(target, uri=uri, timeout=self._connect_timeout_s)
        conn.row_factory = aiosqlite.Row
        await conn.execute(SQLPragmas.JOURNAL_MODE_WAL)
        await conn.execute(SQLPragmas.BUSY_TIMEOUT.format(timeout=self._busy_timeout_ms))
        return conn

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """A fresh connection, closed on exit."""
        conn = await self._open()
        try:
            yield conn
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """A fresh connection that commits on success and rolls back on error."""
        async with self.connection() as conn:
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def execute(self, sql: str, parameters: Params = None) -> int:
        """Run one write statement in its own transaction.

        Returns:
            The number of rows the statement matched.
        """
        async with self.transaction() as conn:
            cursor = await conn.execute(sql, parameters or ())
            return cursor.rowcount

    async def fetch_one(self, sql: str, parameters: Params = None) -> dict[str, Any] | None:
        async with self.connection() as conn:
            cursor = await conn.execute(sql, parameters or ())
            row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, parameters: Params = None) -> list[dict[str, Any]]:
        async with self.connection() as conn:
            cursor = await conn.execute(sql, parameters or ())
            rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def close(self) -> None:
        """Release the keepalive connection; an in-memory database is discarded."""
        keepalive, self._keepalive = self._keepalive, None
        self._initialized = False
        if keepalive is not None:
            await keepalive.close()
        logger.info(LogTemplates.DATABASE_CLOSED)
