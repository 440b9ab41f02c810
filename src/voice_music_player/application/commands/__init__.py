"""
Application Commands (CQRS Write Side)

Command objects and their handlers for write operations.
Commands represent intent to change the system state.
"""

from voice_music_player.application.commands.follow_artist import (
    FollowArtistCommand,
    FollowArtistHandler,
    FollowResult,
    FollowStatus,
)
from voice_music_player.application.commands.like_track import (
    LikeTrackCommand,
    LikeTrackHandler,
    LikeTrackResult,
)
from voice_music_player.application.commands.start_playback import (
    StartFavoritesCommand,
    StartPlaybackCommand,
    StartPlaybackHandler,
    StartResult,
    StartStatus,
    StartStreamCommand,
)

__all__ = [
    "StartPlaybackCommand",
    "StartFavoritesCommand",
    "StartStreamCommand",
    "StartPlaybackHandler",
    "StartResult",
    "StartStatus",
    "LikeTrackCommand",
    "LikeTrackHandler",
    "LikeTrackResult",
    "FollowArtistCommand",
    "FollowArtistHandler",
    "FollowResult",
    "FollowStatus",
]
