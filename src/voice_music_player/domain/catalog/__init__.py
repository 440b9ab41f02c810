"""
Catalog Bounded Context

Models of the remote music catalog as seen by the playback engine.
"""

from voice_music_player.domain.catalog.entities import (
    ActivityEntry,
    ActivityStreamPage,
    CatalogUser,
    PlaylistActivity,
    PlaylistSummary,
    TrackActivity,
    TrackDetail,
    TrackPage,
)
from voice_music_player.domain.catalog.exceptions import RemoteFetchError, TrackNotStreamableError

__all__ = [
    "ActivityEntry",
    "ActivityStreamPage",
    "CatalogUser",
    "PlaylistActivity",
    "PlaylistSummary",
    "TrackActivity",
    "TrackDetail",
    "TrackPage",
    "RemoteFetchError",
    "TrackNotStreamableError",
]
