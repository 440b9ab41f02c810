"""Wiring for one engine process.

The container builds the session store, the catalog client, the playback
engine and its handlers on first access and owns their async resources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.commands.follow_artist import FollowArtistHandler
    from ..application.commands.like_track import LikeTrackHandler
    from ..application.commands.start_playback import StartPlaybackHandler
    from ..application.queries.resolve_playable import ResolvePlayableHandler
    from ..application.services.playback_session import PlaybackSessionService
    from ..domain.playback.repository import SessionStore
    from ..infrastructure.catalog.http_catalog import HttpRemoteCatalog
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Holds lazily built components for one `Settings` instance."""

    settings: Settings

    # Persistence layer
    _database: Database | None = None
    _session_store: SessionStore | None = None

    # Infrastructure adapters
    _catalog: HttpRemoteCatalog | None = None

    # Application services
    _playback_session: PlaybackSessionService | None = None

    # Command handlers
    _start_playback_handler: StartPlaybackHandler | None = None
    _like_track_handler: LikeTrackHandler | None = None
    _follow_artist_handler: FollowArtistHandler | None = None

    # Query handlers
    _resolve_playable_handler: ResolvePlayableHandler | None = None

    @property
    def database(self) -> Database:
        """SQLite access shared by every store."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    @property
    def session_store(self) -> SessionStore:
        """Get the playback session store."""
        if self._session_store is None:
            from ..infrastructure.persistence.repositories.session_store import (
                SQLiteSessionStore,
            )

            self._session_store = SQLiteSessionStore(self.database)
        return self._session_store

    @property
    def catalog(self) -> HttpRemoteCatalog:
        """Get the remote catalog client."""
        if self._catalog is None:
            from ..infrastructure.catalog.http_catalog import HttpRemoteCatalog

            self._catalog = HttpRemoteCatalog(self.settings.catalog)
        return self._catalog

    @property
    def playback_session(self) -> PlaybackSessionService:
        """Get the playback session engine."""
        if self._playback_session is None:
            from ..application.services.playback_session import PlaybackSessionService

            self._playback_session = PlaybackSessionService(
                session_store=self.session_store,
                catalog=self.catalog,
            )
        return self._playback_session

    @property
    def start_playback_handler(self) -> StartPlaybackHandler:
        """Get the start playback command handler."""
        if self._start_playback_handler is None:
            from ..application.commands.start_playback import StartPlaybackHandler

            self._start_playback_handler = StartPlaybackHandler(
                playback_session=self.playback_session,
                catalog=self.catalog,
            )
        return self._start_playback_handler

    @property
    def like_track_handler(self) -> LikeTrackHandler:
        if self._like_track_handler is None:
            from ..application.commands.like_track import LikeTrackHandler

            self._like_track_handler = LikeTrackHandler(catalog=self.catalog)
        return self._like_track_handler

    @property
    def follow_artist_handler(self) -> FollowArtistHandler:
        if self._follow_artist_handler is None:
            from ..application.commands.follow_artist import FollowArtistHandler

            self._follow_artist_handler = FollowArtistHandler(catalog=self.catalog)
        return self._follow_artist_handler

    @property
    def resolve_playable_handler(self) -> ResolvePlayableHandler:
        """Get the resolve playable query handler."""
        if self._resolve_playable_handler is None:
            from ..application.queries.resolve_playable import ResolvePlayableHandler

            self._resolve_playable_handler = ResolvePlayableHandler(catalog=self.catalog)
        return self._resolve_playable_handler

    async def initialize(self) -> None:
        """Create the schema; call before the first engine call."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Close the catalog client and release the database."""
        try:
            if self._catalog is not None:
                await self._catalog.aclose()
        except Exception as exc:
            logger.warning("Failed closing catalog client: %r", exc)

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    return Container(settings)
