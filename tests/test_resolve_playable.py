"""
Unit Tests for the Resolve Playable Query

Tests for:
- Building a PlayableTrack from catalog details and the stream redirect
- Propagation of catalog errors
"""

import pytest
from conftest import make_ref, make_track
from pydantic import ValidationError as PydanticValidationError

from voice_music_player.application.queries.resolve_playable import (
    PlayableTrack,
    ResolvePlayableHandler,
    ResolvePlayableQuery,
)
from voice_music_player.domain.catalog.exceptions import TrackNotStreamableError


@pytest.fixture
def handler(catalog):
    return ResolvePlayableHandler(catalog=catalog)


class TestResolvePlayableQuery:
    def test_accepts_plain_string_reference(self):
        query = ResolvePlayableQuery(reference="https://api.example.com/tracks/1")
        assert query.reference == make_ref(1)
        assert query.offset_ms == 0

    def test_rejects_negative_offset(self):
        with pytest.raises(PydanticValidationError):
            ResolvePlayableQuery(reference=make_ref(1), offset_ms=-1)


class TestResolvePlayableHandler:
    """Tests for ResolvePlayableHandler."""

    @pytest.mark.asyncio
    async def test_resolve(self, handler, catalog):
        track = make_track(1)
        catalog.resolve_track.return_value = track
        catalog.to_playable_url.return_value = "https://cdn.example.com/1.mp3?sig=x"

        playable = await handler.handle(ResolvePlayableQuery(reference=make_ref(1), offset_ms=2500))

        assert playable == PlayableTrack(
            reference=make_ref(1),
            title="Track 1",
            artist="Artist",
            stream_url="https://cdn.example.com/1.mp3?sig=x",
            offset_ms=2500,
            image_url="https://img.example.com/1.jpg",
        )
        catalog.resolve_track.assert_awaited_once_with(make_ref(1))
        catalog.to_playable_url.assert_awaited_once_with(track)

    @pytest.mark.asyncio
    async def test_not_streamable_propagates(self, handler, catalog):
        catalog.resolve_track.return_value = make_track(1)
        catalog.to_playable_url.side_effect = TrackNotStreamableError(
            "https://x/stream", "https://x", status=403
        )

        with pytest.raises(TrackNotStreamableError):
            await handler.handle(ResolvePlayableQuery(reference=make_ref(1)))

    @pytest.mark.asyncio
    async def test_serializes_reference_as_string(self, handler, catalog):
        catalog.resolve_track.return_value = make_track(2, artwork_url=None, user=None)
        catalog.to_playable_url.return_value = "https://cdn.example.com/2.mp3"

        playable = await handler.handle(ResolvePlayableQuery(reference=make_ref(2)))

        dumped = playable.model_dump(mode="json")
        assert dumped["reference"] == str(make_ref(2))
        assert dumped["artist"] is None
        assert dumped["image_url"] is None
