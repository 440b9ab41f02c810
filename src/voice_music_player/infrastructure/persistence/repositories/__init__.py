"""SQLite repository implementations."""

from voice_music_player.infrastructure.persistence.repositories.session_store import (
    SQLiteSessionStore,
)

__all__ = [
    "SQLiteSessionStore",
]
