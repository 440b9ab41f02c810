"""Playback Session Service - navigation over a lazily paginated queue."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ...domain.catalog.exceptions import RemoteFetchError
from ...domain.playback.entities import PlaybackState
from ...domain.playback.exceptions import MissingAuthTokenError, TrackNotFoundInQueueError
from ...domain.playback.value_objects import PlaybackMode
from ...domain.shared.exceptions import ValidationError
from ...domain.shared.messages import ErrorMessages, LogTemplates
from .playback_models import NavigationResult, NavigationStatus, ResumePoint

if TYPE_CHECKING:
    from ...domain.playback.repository import SessionStore
    from ...domain.playback.value_objects import TrackReference
    from ..interfaces.remote_catalog import RemoteCatalog

logger = logging.getLogger(__name__)


class PlaybackSessionService:
    """Decides what plays next or previous and keeps the session durable.

    Every call is one load/compute/persist cycle against the session store and
    makes at most one catalog request. Nothing is cached between calls, so
    the service can be used from independent, stateless request handlers.

    Two calls for the same user running at the same time may read the same
    state; narrow updates then resolve as last writer wins, while a racing
    continuation append fails with ``ConcurrencyError``.
    """

    def __init__(self, *, session_store: SessionStore, catalog: RemoteCatalog) -> None:
        self._store = session_store
        self._catalog = catalog

    async def start_session(
        self,
        user_id: str,
        tracks: Sequence[TrackReference],
        cursor: str | None,
        mode: PlaybackMode,
    ) -> PlaybackState:
        """Replace the user's session with a fresh queue positioned at its first track."""
        state = PlaybackState.start(user_id, tracks, cursor, mode)
        await self._store.put(state)
        logger.info(
            LogTemplates.SESSION_STARTED, mode.value, user_id, state.queue_length, state.has_more_pages
        )
        return state

    async def get_state(self, user_id: str) -> PlaybackState:
        return await self._store.get(user_id)

    async def next_track(self, user_id: str, auth_token: str | None = None) -> NavigationResult:
        """Advance to the next track, fetching one more catalog page if needed.

        Args:
            user_id: The voice platform user ID.
            auth_token: OAuth token of the user; required to continue a
                session in stream mode.

        Returns:
            The next track, or END_OF_QUEUE / EMPTY_CONTINUATION.

        Raises:
            NoPlaybackStateError: If the user has no session.
            MissingAuthTokenError: If a stream page is needed but no token was given.
            RemoteFetchError: If the continuation request failed. Nothing is persisted.
            ConcurrencyError: If another call appended to the session meanwhile.
        """
        state = await self._store.get(user_id)

        index = state.next_index()
        if index is not None:
            await self._store.update_position(user_id, index)
            track = state.track_at(index)
            if index > state.position:
                result = NavigationResult.advanced(track, index)
            else:
                result = NavigationResult.wrapped(track)
            logger.debug(LogTemplates.NAVIGATION_RESULT, user_id, "next", result.status.value)
            return result

        if state.cursor is None:
            logger.debug(LogTemplates.NAVIGATION_RESULT, user_id, "next", NavigationStatus.END_OF_QUEUE.value)
            return NavigationResult.nothing(NavigationStatus.END_OF_QUEUE)

        return await self._continue(state, state.cursor, auth_token)

    async def previous_track(self, user_id: str) -> NavigationResult:
        """Step back one track. Never wraps around, even when looping."""
        state = await self._store.get(user_id)

        index = state.previous_index()
        if index is None:
            logger.debug(
                LogTemplates.NAVIGATION_RESULT, user_id, "previous", NavigationStatus.START_OF_QUEUE.value
            )
            return NavigationResult.nothing(NavigationStatus.START_OF_QUEUE)

        await self._store.update_position(user_id, index)
        logger.debug(LogTemplates.NAVIGATION_RESULT, user_id, "previous", NavigationStatus.REWOUND.value)
        return NavigationResult.rewound(state.track_at(index), index)

    async def update_position(self, user_id: str, reference: TrackReference) -> int:
        """Point the session at the track the player reports as playing.

        Raises:
            TrackNotFoundInQueueError: If the track is not in the stored queue.
        """
        state = await self._store.get(user_id)
        position = self._locate(state, reference)
        await self._store.update_position(user_id, position)
        return position

    async def remember_offset_and_position(
        self, user_id: str, reference: TrackReference, offset_ms: int
    ) -> int:
        """Bookmark the playing track and the offset inside it, e.g. on pause."""
        if offset_ms < 0:
            raise ValidationError(ErrorMessages.NEGATIVE_OFFSET, field="offset_ms")

        state = await self._store.get(user_id)
        position = self._locate(state, reference)
        await self._store.update_offset_and_position(user_id, offset_ms, position)
        return position

    async def set_loop(self, user_id: str, enabled: bool) -> None:
        await self._store.update_looping(user_id, enabled)

    async def set_shuffle(self, user_id: str, enabled: bool) -> None:
        await self._store.update_shuffle(user_id, enabled)

    async def resume(self, user_id: str) -> ResumePoint | None:
        """Return the bookmarked track and offset, or None for an empty queue."""
        state = await self._store.get(user_id)
        track = state.current_track
        if track is None:
            return None
        return ResumePoint(track=track, position=state.position, offset_ms=state.offset_ms)

    async def start_over(self, user_id: str) -> NavigationResult:
        """Jump back to the first track of the session and forget the offset."""
        state = await self._store.get(user_id)
        if state.is_empty:
            return NavigationResult.nothing(NavigationStatus.EMPTY_QUEUE)

        await self._store.update_offset_and_position(user_id, 0, 0)
        return NavigationResult.restarted(state.track_at(0))

    def _locate(self, state: PlaybackState, reference: TrackReference) -> int:
        try:
            return state.index_of(reference)
        except TrackNotFoundInQueueError:
            logger.error(LogTemplates.POSITION_TRACK_MISSING, reference, state.user_id)
            raise

    async def _continue(
        self, state: PlaybackState, cursor: str, auth_token: str | None
    ) -> NavigationResult:
        user_id = state.user_id

        if state.mode.requires_auth_token and not auth_token:
            raise MissingAuthTokenError(user_id)

        logger.info(LogTemplates.CONTINUATION_FETCHING, user_id, state.mode.value)
        try:
            if state.mode is PlaybackMode.STREAM:
                stream_page = await self._catalog.fetch_stream_page(cursor, auth_token)
                references, next_cursor = stream_page.references, stream_page.next_href
            else:
                page = await self._catalog.fetch_page(cursor)
                references, next_cursor = page.references, page.next_href
        except RemoteFetchError as e:
            logger.warning(LogTemplates.CONTINUATION_FAILED, user_id, e)
            raise

        updated = state.with_page(references, next_cursor)
        await self._store.put(updated, expected=state)

        if not references:
            logger.info(LogTemplates.CONTINUATION_EMPTY, user_id, updated.has_more_pages)
            return NavigationResult.nothing(NavigationStatus.EMPTY_CONTINUATION)

        logger.info(LogTemplates.CONTINUATION_APPENDED, len(references), user_id, updated.has_more_pages)
        return NavigationResult.continued(updated.track_at(updated.position), updated.position)
