"""
Application Queries (CQRS Read Side)

Query objects and their handlers for read operations.
"""

from voice_music_player.application.queries.resolve_playable import (
    PlayableTrack,
    ResolvePlayableHandler,
    ResolvePlayableQuery,
)

__all__ = [
    "ResolvePlayableQuery",
    "ResolvePlayableHandler",
    "PlayableTrack",
]
