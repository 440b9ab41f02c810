"""Query for turning a queued track reference into something a player can stream."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from voice_music_player.domain.playback.value_objects import TrackReferenceField
from voice_music_player.domain.shared.types import NonEmptyStr, OffsetMs

if TYPE_CHECKING:
    from ..interfaces.remote_catalog import RemoteCatalog


class ResolvePlayableQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    reference: TrackReferenceField
    offset_ms: OffsetMs = 0


class PlayableTrack(BaseModel):
    """Everything a voice surface needs to start streaming a track."""

    model_config = ConfigDict(frozen=True)

    reference: TrackReferenceField
    title: NonEmptyStr
    artist: str | None = None
    stream_url: NonEmptyStr
    offset_ms: OffsetMs = 0
    image_url: str | None = None


class ResolvePlayableHandler:

    def __init__(self, *, catalog: RemoteCatalog) -> None:
        self._catalog = catalog

    async def handle(self, query: ResolvePlayableQuery) -> PlayableTrack:
        track = await self._catalog.resolve_track(query.reference)
        stream_url = await self._catalog.to_playable_url(track)

        return PlayableTrack(
            reference=query.reference,
            title=track.title,
            artist=track.artist,
            stream_url=stream_url,
            offset_ms=query.offset_ms,
            image_url=track.display_image_url,
        )
