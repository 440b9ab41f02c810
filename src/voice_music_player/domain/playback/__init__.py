"""
Playback Bounded Context

Domain logic for a listener's position in a lazily paginated track queue.
"""

from voice_music_player.domain.playback.entities import PlaybackState
from voice_music_player.domain.playback.exceptions import (
    MissingAuthTokenError,
    NoPlaybackStateError,
    TrackNotFoundInQueueError,
)
from voice_music_player.domain.playback.repository import SessionStore
from voice_music_player.domain.playback.value_objects import PlaybackMode, TrackReference

__all__ = [
    # Entities
    "PlaybackState",
    # Value Objects
    "TrackReference",
    "PlaybackMode",
    # Errors
    "NoPlaybackStateError",
    "TrackNotFoundInQueueError",
    "MissingAuthTokenError",
    # Repository
    "SessionStore",
]
