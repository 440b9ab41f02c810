"""
Start Playback Commands

Commands and handler that open a new playback session from the first page
of the user's favorites or activity stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ...domain.playback.value_objects import PlaybackMode
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.catalog.entities import TrackDetail
    from ..interfaces.remote_catalog import RemoteCatalog
    from ..services.playback_session import PlaybackSessionService

logger = logging.getLogger(__name__)


class StartStatus(Enum):
    """Status codes for start results."""

    STARTED = "started"
    NO_TRACKS = "no_tracks"


@dataclass
class StartPlaybackCommand:
    """Base command carrying who starts playback and their catalog token."""

    user_id: str
    access_token: str

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("User ID cannot be empty")
        if not self.access_token:
            raise ValueError("Access token cannot be empty")


@dataclass
class StartFavoritesCommand(StartPlaybackCommand):
    """Command to play the user's liked tracks."""


@dataclass
class StartStreamCommand(StartPlaybackCommand):
    """Command to play the tracks of the user's activity stream."""


@dataclass
class StartResult:
    """Result of a start playback command."""

    status: StartStatus
    mode: PlaybackMode
    track: TrackDetail | None = None
    queue_length: int = 0
    has_more_pages: bool = False

    @property
    def is_success(self) -> bool:
        return self.status == StartStatus.STARTED

    @classmethod
    def started(
        cls, mode: PlaybackMode, track: TrackDetail, queue_length: int, has_more_pages: bool
    ) -> StartResult:
        return cls(
            status=StartStatus.STARTED,
            mode=mode,
            track=track,
            queue_length=queue_length,
            has_more_pages=has_more_pages,
        )

    @classmethod
    def no_tracks(cls, mode: PlaybackMode) -> StartResult:
        return cls(status=StartStatus.NO_TRACKS, mode=mode)

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "mode": self.mode.value,
            "track": str(self.track.reference) if self.track is not None else None,
            "title": self.track.title if self.track is not None else None,
            "queue_length": self.queue_length,
            "has_more_pages": self.has_more_pages,
        }


class StartPlaybackHandler:
    """Handler for StartFavoritesCommand and StartStreamCommand.

    Fetches the first catalog page and replaces the user's session with it.
    When the page holds no playable tracks the stored session is left alone.
    """

    def __init__(
        self,
        *,
        playback_session: PlaybackSessionService,
        catalog: RemoteCatalog,
    ) -> None:
        self._playback_session = playback_session
        self._catalog = catalog

    async def handle(self, command: StartPlaybackCommand) -> StartResult:
        """Execute a start command.

        Args:
            command: A favorites or stream start command.

        Returns:
            The result of the operation.

        Raises:
            RemoteFetchError: If the first page could not be fetched.
        """
        tracks: list[TrackDetail]
        if isinstance(command, StartStreamCommand):
            mode = PlaybackMode.STREAM
            stream_page = await self._catalog.get_activity_stream(command.access_token)
            tracks, next_cursor = stream_page.tracks(), stream_page.next_href
        else:
            mode = PlaybackMode.TRACK_LIST
            page = await self._catalog.get_favorites(command.access_token)
            tracks, next_cursor = page.tracks(), page.next_href

        if not tracks:
            logger.info(LogTemplates.START_NO_TRACKS, mode.value, command.user_id)
            return StartResult.no_tracks(mode)

        state = await self._playback_session.start_session(
            command.user_id,
            [track.reference for track in tracks],
            next_cursor,
            mode,
        )
        return StartResult.started(mode, tracks[0], state.queue_length, state.has_more_pages)
