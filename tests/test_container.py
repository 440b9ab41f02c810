"""
Unit Tests for Dependency Injection Container

Tests for:
- Container creation with settings
- Lazy initialization and caching of components
- Wiring of the engine, handlers and adapters
- Lifecycle methods (initialize, shutdown)
"""

from unittest.mock import AsyncMock

import pytest

from voice_music_player.application.commands.follow_artist import FollowArtistHandler
from voice_music_player.application.commands.like_track import LikeTrackHandler
from voice_music_player.application.commands.start_playback import StartPlaybackHandler
from voice_music_player.application.queries.resolve_playable import ResolvePlayableHandler
from voice_music_player.application.services.playback_session import PlaybackSessionService
from voice_music_player.config.container import Container, create_container
from voice_music_player.config.settings import DatabaseSettings, Settings
from voice_music_player.infrastructure.catalog.http_catalog import HttpRemoteCatalog
from voice_music_player.infrastructure.persistence.database import Database
from voice_music_player.infrastructure.persistence.repositories.session_store import (
    SQLiteSessionStore,
)


@pytest.fixture
def settings():
    return Settings(_env_file=None, database=DatabaseSettings(url="sqlite:///:memory:"))


@pytest.fixture
def container(settings):
    return create_container(settings)


# =============================================================================
# Container Initialization Tests
# =============================================================================


class TestContainerInitialization:
    def test_create_container_factory(self, settings):
        container = create_container(settings)

        assert isinstance(container, Container)
        assert container.settings is settings

    def test_nothing_built_up_front(self, container):
        assert container._database is None
        assert container._catalog is None
        assert container._playback_session is None


# =============================================================================
# Lazy Component Tests
# =============================================================================


class TestLazyComponents:
    def test_database_uses_settings(self, container):
        db = container.database

        assert isinstance(db, Database)
        assert db.db_path == ":memory:"
        assert container.database is db

    def test_session_store(self, container):
        store = container.session_store

        assert isinstance(store, SQLiteSessionStore)
        assert container.session_store is store

    def test_catalog(self, container):
        catalog = container.catalog

        assert isinstance(catalog, HttpRemoteCatalog)
        assert container.catalog is catalog

    def test_playback_session_shares_dependencies(self, container):
        service = container.playback_session

        assert isinstance(service, PlaybackSessionService)
        assert service._store is container.session_store
        assert service._catalog is container.catalog
        assert container.playback_session is service

    def test_handlers(self, container):
        assert isinstance(container.start_playback_handler, StartPlaybackHandler)
        assert isinstance(container.resolve_playable_handler, ResolvePlayableHandler)
        assert container.start_playback_handler is container.start_playback_handler

    def test_feedback_handlers_share_catalog(self, container):
        like = container.like_track_handler
        follow = container.follow_artist_handler

        assert isinstance(like, LikeTrackHandler)
        assert isinstance(follow, FollowArtistHandler)
        assert like._catalog is container.catalog
        assert follow._catalog is container.catalog
        assert container.like_track_handler is like


# =============================================================================
# Lifecycle Tests
# =============================================================================


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_and_shutdown(self, container):
        await container.initialize()
        assert container.database.is_initialized

        await container.shutdown()
        assert not container.database.is_initialized

    @pytest.mark.asyncio
    async def test_shutdown_closes_catalog(self, container):
        container._catalog = AsyncMock(spec=HttpRemoteCatalog)

        await container.shutdown()

        container._catalog.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_survives_catalog_failure(self, container):
        await container.initialize()
        container._catalog = AsyncMock(spec=HttpRemoteCatalog)
        container._catalog.aclose.side_effect = RuntimeError("boom")

        await container.shutdown()

        assert not container.database.is_initialized

    @pytest.mark.asyncio
    async def test_shutdown_without_components(self, container):
        await container.shutdown()
