"""Remote music catalog adapters."""

from voice_music_player.infrastructure.catalog.http_catalog import HttpRemoteCatalog

__all__ = [
    "HttpRemoteCatalog",
]
