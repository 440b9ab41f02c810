from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

API = "https://api.example.com"

# ============================================================================
# Helpers
# ============================================================================


def track_uri(n: int) -> str:
    return f"{API}/tracks/{n}"


def make_ref(n: int):
    from voice_music_player.domain.playback.value_objects import TrackReference

    return TrackReference(track_uri(n))


def make_refs(*numbers: int) -> list:
    return [make_ref(n) for n in numbers]


def track_payload(n: int, **overrides) -> dict:
    """A track as the catalog API returns it."""
    payload = {
        "kind": "track",
        "id": n,
        "title": f"Track {n}",
        "uri": track_uri(n),
        "permalink_url": f"https://example.com/artist/track-{n}",
        "stream_url": f"{track_uri(n)}/stream",
        "artwork_url": f"https://img.example.com/{n}.jpg",
        "duration": 180000 + n,
        "streamable": True,
        "user": {"id": 7, "username": "Artist", "avatar_url": "https://img.example.com/a.jpg"},
    }
    payload.update(overrides)
    return payload


def make_track(n: int, **overrides):
    from voice_music_player.domain.catalog.entities import TrackDetail

    return TrackDetail.model_validate(track_payload(n, **overrides))


def make_page(*numbers: int, next_href: str | None = None):
    from voice_music_player.domain.catalog.entities import TrackPage

    return TrackPage(collection=[make_track(n) for n in numbers], next_href=next_href)


def make_stream_page(*numbers: int, next_href: str | None = None):
    from voice_music_player.domain.catalog.entities import ActivityStreamPage

    return ActivityStreamPage.model_validate(
        {
            "collection": [{"type": "track", "origin": track_payload(n)} for n in numbers],
            "next_href": next_href,
        }
    )


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from voice_music_player.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session_store(in_memory_database):
    """Create a session store with in-memory database."""
    from voice_music_player.infrastructure.persistence.repositories.session_store import (
        SQLiteSessionStore,
    )

    return SQLiteSessionStore(in_memory_database)


# ============================================================================
# Port / Service Fixtures
# ============================================================================


@pytest.fixture
def catalog():
    """A remote catalog double; configure return values per test."""
    from voice_music_player.application.interfaces.remote_catalog import RemoteCatalog

    return AsyncMock(spec=RemoteCatalog)


@pytest_asyncio.fixture
async def playback_session(session_store, catalog):
    """Create the playback engine backed by the in-memory store."""
    from voice_music_player.application.services.playback_session import PlaybackSessionService

    return PlaybackSessionService(session_store=session_store, catalog=catalog)
