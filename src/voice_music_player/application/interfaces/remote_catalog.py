"""Port interface for the paginated remote music catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from voice_music_player.domain.shared.types import NonEmptyStr

if TYPE_CHECKING:
    from ...domain.catalog.entities import ActivityStreamPage, CatalogUser, TrackDetail, TrackPage
    from ...domain.playback.value_objects import TrackReference


class RemoteCatalog(ABC):
    """Interface for fetching track pages and resolving tracks.

    Every call is a single request with no retries; failures surface as
    ``RemoteFetchError``.
    """

    @abstractmethod
    async def fetch_page(self, cursor: NonEmptyStr) -> "TrackPage":
        """Fetch the track-list page a continuation cursor points at."""
        ...

    @abstractmethod
    async def fetch_stream_page(self, cursor: NonEmptyStr, auth_token: NonEmptyStr) -> "ActivityStreamPage":
        """Fetch the activity-stream page a continuation cursor points at."""
        ...

    @abstractmethod
    async def get_favorites(self, auth_token: NonEmptyStr) -> "TrackPage":
        """Fetch the first page of the user's liked tracks."""
        ...

    @abstractmethod
    async def get_activity_stream(self, auth_token: NonEmptyStr) -> "ActivityStreamPage":
        """Fetch the first page of the user's activity stream."""
        ...

    @abstractmethod
    async def resolve_track(self, reference: "TrackReference") -> "TrackDetail":
        """Load the full details of a track."""
        ...

    @abstractmethod
    async def to_playable_url(self, track: "TrackDetail") -> str:
        """Turn a track into a URL an audio player can stream.

        Raises:
            TrackNotStreamableError: If the catalog does not hand out a stream.
        """
        ...

    @abstractmethod
    async def like_track(self, auth_token: NonEmptyStr, track: "TrackDetail") -> None:
        """Add a track to the user's favorites. Liking a liked track is a no-op."""
        ...

    @abstractmethod
    async def follow_user(self, auth_token: NonEmptyStr, user: "CatalogUser") -> bool:
        """Follow the uploader of a track.

        Returns:
            True if the user is followed now, False if they already were.
        """
        ...
