"""SQLite persistence: the database manager and store implementations."""

from voice_music_player.infrastructure.persistence.database import Database

__all__ = [
    "Database",
]
