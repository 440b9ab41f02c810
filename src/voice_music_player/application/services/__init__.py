"""
Application Services

Orchestration of the playback domain against its ports.
"""

from voice_music_player.application.services.playback_models import (
    NavigationResult,
    NavigationStatus,
    ResumePoint,
)
from voice_music_player.application.services.playback_session import PlaybackSessionService

__all__ = [
    "PlaybackSessionService",
    "NavigationResult",
    "NavigationStatus",
    "ResumePoint",
]
