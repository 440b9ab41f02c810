"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (SQLite session store)
- Catalog (httpx client for the remote music catalog)
"""

from voice_music_player.infrastructure.catalog.http_catalog import HttpRemoteCatalog
from voice_music_player.infrastructure.persistence.database import Database

__all__ = [
    "HttpRemoteCatalog",
    "Database",
]
