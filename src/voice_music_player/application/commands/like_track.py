"""
Like Track Command

Adds the track a listener is hearing to their catalog favorites.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ...domain.playback.value_objects import TrackReference

if TYPE_CHECKING:
    from ..interfaces.remote_catalog import RemoteCatalog


@dataclass
class LikeTrackCommand:
    """Command to like the track identified by ``reference``."""

    user_id: str
    reference: TrackReference
    access_token: str

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("User ID cannot be empty")
        if not self.access_token:
            raise ValueError("Access token cannot be empty")


@dataclass
class LikeTrackResult:
    reference: TrackReference
    title: str

    def as_dict(self) -> dict[str, Any]:
        return {"status": "liked", "track": str(self.reference), "title": self.title}


class LikeTrackHandler:
    """Handler for LikeTrackCommand.

    Resolves the track first so a stale or unknown reference fails before
    anything is written to the catalog.
    """

    def __init__(self, *, catalog: RemoteCatalog) -> None:
        self._catalog = catalog

    async def handle(self, command: LikeTrackCommand) -> LikeTrackResult:
        """Execute the like command.

        Raises:
            RemoteFetchError: If the track could not be resolved or the catalog
                refused the like.
        """
        track = await self._catalog.resolve_track(command.reference)
        await self._catalog.like_track(command.access_token, track)
        return LikeTrackResult(reference=command.reference, title=track.title)
