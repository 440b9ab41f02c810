"""SQLite implementation of the playback session store."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from voice_music_player.domain.playback.entities import PlaybackState
from voice_music_player.domain.playback.exceptions import NoPlaybackStateError
from voice_music_player.domain.playback.repository import SessionStore
from voice_music_player.domain.playback.value_objects import PlaybackMode, TrackReference
from voice_music_player.domain.shared.exceptions import ConcurrencyError
from voice_music_player.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class SQLiteSessionStore(SessionStore):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, user_id: str) -> PlaybackState:
        row = await self._db.fetch_one(
            "SELECT * FROM playback_sessions WHERE user_id = ?",
            (user_id,),
        )

        if row is None:
            raise NoPlaybackStateError(user_id)

        return self._row_to_state(row)

    async def exists(self, user_id: str) -> bool:
        row = await self._db.fetch_one(
            "SELECT 1 FROM playback_sessions WHERE user_id = ?",
            (user_id,),
        )
        return row is not None

    async def put(self, state: PlaybackState, *, expected: PlaybackState | None = None) -> None:
        if expected is None:
            await self._upsert(state)
        else:
            await self._replace_if_unchanged(state, expected)

        logger.debug(LogTemplates.SESSION_SAVED, state.user_id, state.queue_length, state.position)

    async def update_position(self, user_id: str, position: int) -> None:
        await self._update(
            user_id,
            "position = ?",
            (position,),
        )
        logger.debug(LogTemplates.SESSION_POSITION_UPDATED, user_id, position)

    async def update_offset_and_position(self, user_id: str, offset_ms: int, position: int) -> None:
        await self._update(
            user_id,
            "offset_ms = ?, position = ?",
            (offset_ms, position),
        )
        logger.debug(LogTemplates.SESSION_OFFSET_UPDATED, offset_ms, position, user_id)

    async def update_looping(self, user_id: str, looping: bool) -> None:
        await self._update(user_id, "looping = ?", (int(looping),))
        logger.debug(LogTemplates.SESSION_LOOP_UPDATED, looping, user_id)

    async def update_shuffle(self, user_id: str, shuffle: bool) -> None:
        await self._update(user_id, "shuffle = ?", (int(shuffle),))
        logger.debug(LogTemplates.SESSION_SHUFFLE_UPDATED, shuffle, user_id)

    # ──────────────────────────────────────────────────────────────────

    async def _upsert(self, state: PlaybackState) -> None:
        await self._db.execute(
            """
            INSERT INTO playback_sessions (
                user_id, queue, queue_length, position, offset_ms,
                cursor, looping, shuffle, mode, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                queue = excluded.queue,
                queue_length = excluded.queue_length,
                position = excluded.position,
                offset_ms = excluded.offset_ms,
                cursor = excluded.cursor,
                looping = excluded.looping,
                shuffle = excluded.shuffle,
                mode = excluded.mode,
                updated_at = excluded.updated_at
            """,
            self._state_to_params(state),
        )

    async def _replace_if_unchanged(self, state: PlaybackState, expected: PlaybackState) -> None:
        # The queue only grows at the tail, so cursor plus length identify
        # the version a continuation was computed from. Flags and offset are
        # left to the narrow updates.
        changed = await self._db.execute(
            """
            UPDATE playback_sessions SET
                queue = ?, queue_length = ?, position = ?, cursor = ?, updated_at = ?
            WHERE user_id = ? AND cursor IS ? AND queue_length = ?
            """,
            (
                self._queue_to_json(state),
                state.queue_length,
                state.position,
                state.cursor,
                _utc_now(),
                state.user_id,
                expected.cursor,
                expected.queue_length,
            ),
        )

        if changed == 0:
            logger.warning(
                LogTemplates.SESSION_CONDITIONAL_WRITE_LOST,
                state.user_id,
                expected.cursor,
                expected.queue_length,
            )
            raise ConcurrencyError(
                "PlaybackState",
                ErrorMessages.CONTINUATION_RACE.format(user_id=state.user_id),
            )

    async def _update(self, user_id: str, assignments: str, values: tuple[Any, ...]) -> None:
        changed = await self._db.execute(
            f"UPDATE playback_sessions SET {assignments}, updated_at = ? WHERE user_id = ?",
            (*values, _utc_now(), user_id),
        )
        if changed == 0:
            raise NoPlaybackStateError(user_id)

    def _state_to_params(self, state: PlaybackState) -> tuple[Any, ...]:
        return (
            state.user_id,
            self._queue_to_json(state),
            state.queue_length,
            state.position,
            state.offset_ms,
            state.cursor,
            int(state.looping),
            int(state.shuffle),
            state.mode.value,
            _utc_now(),
        )

    def _queue_to_json(self, state: PlaybackState) -> str:
        return json.dumps([ref.value for ref in state.queue])

    def _row_to_state(self, row: dict[str, Any]) -> PlaybackState:
        return PlaybackState(
            user_id=row["user_id"],
            queue=tuple(TrackReference(value) for value in json.loads(row["queue"])),
            position=row["position"],
            cursor=row["cursor"],
            offset_ms=row["offset_ms"],
            looping=bool(row["looping"]),
            shuffle=bool(row["shuffle"]),
            mode=PlaybackMode(row["mode"]),
        )
