"""Catalog models: tracks, users, playlists and paginated result pages.

Payloads come straight from the catalog API, so every model ignores unknown
fields. Activity stream entries are a tagged union keyed on ``type``.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Final, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from voice_music_player.domain.playback.value_objects import TrackReference
from voice_music_player.domain.shared.messages import LogTemplates
from voice_music_player.domain.shared.types import (
    DurationMs,
    HttpUrlStr,
    NonEmptyStr,
    NonNegativeInt,
)

logger = logging.getLogger(__name__)

TRACK_ACTIVITY_TYPES: Final[frozenset[str]] = frozenset({"track", "track-repost"})
PLAYLIST_ACTIVITY_TYPES: Final[frozenset[str]] = frozenset({"playlist", "playlist-repost"})
KNOWN_ACTIVITY_TYPES: Final[frozenset[str]] = TRACK_ACTIVITY_TYPES | PLAYLIST_ACTIVITY_TYPES


class CatalogUser(BaseModel):
    """The uploader of a track or playlist."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    username: NonEmptyStr
    permalink_url: HttpUrlStr | None = None
    avatar_url: HttpUrlStr | None = None


class TrackDetail(BaseModel):
    """A fully resolved catalog track."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: int
    title: NonEmptyStr
    uri: HttpUrlStr
    permalink_url: HttpUrlStr | None = None
    stream_url: HttpUrlStr | None = None
    artwork_url: HttpUrlStr | None = None
    duration_ms: DurationMs | None = Field(
        default=None, validation_alias=AliasChoices("duration", "duration_ms")
    )
    streamable: bool = True
    genre: str | None = None
    user: CatalogUser | None = None

    @field_validator("permalink_url", "stream_url", "artwork_url", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @property
    def reference(self) -> TrackReference:
        return TrackReference(self.uri)

    @property
    def artist(self) -> str | None:
        return self.user.username if self.user else None

    @property
    def display_image_url(self) -> str | None:
        """Artwork of the track, falling back to the uploader's avatar."""
        if self.artwork_url:
            return self.artwork_url
        return self.user.avatar_url if self.user else None


class PlaylistSummary(BaseModel):
    """A playlist as it appears in the activity stream."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    title: NonEmptyStr
    uri: HttpUrlStr
    track_count: NonNegativeInt = 0
    user: CatalogUser | None = None


class TrackActivity(BaseModel):
    """Stream entry carrying a track (an upload or a repost)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["track", "track-repost"]
    origin: TrackDetail
    tags: str | None = None
    created_at: str | None = None


class PlaylistActivity(BaseModel):
    """Stream entry carrying a playlist; never playable on its own."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["playlist", "playlist-repost"]
    origin: PlaylistSummary
    tags: str | None = None
    created_at: str | None = None


ActivityEntry = Annotated[TrackActivity | PlaylistActivity, Field(discriminator="type")]

_ACTIVITY_ADAPTER: TypeAdapter[TrackActivity | PlaylistActivity] = TypeAdapter(ActivityEntry)


class TrackPage(BaseModel):
    """One page of a track listing (search results, favorites).

    Tracks that fail validation are dropped with a warning, the same way
    ``ActivityStreamPage`` treats its entries.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    collection: list[TrackDetail] = Field(default_factory=list)
    next_href: NonEmptyStr | None = None

    @field_validator("collection", mode="before")
    @classmethod
    def _drop_invalid_tracks(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v

        kept: list[Any] = []
        for raw in v:
            if raw is None:
                continue
            if isinstance(raw, TrackDetail):
                kept.append(raw)
                continue
            try:
                kept.append(TrackDetail.model_validate(raw))
            except PydanticValidationError as e:
                track_id = raw.get("id") if isinstance(raw, dict) else None
                logger.warning(LogTemplates.CATALOG_INVALID_TRACK, track_id, e.error_count())
        return kept

    @property
    def references(self) -> list[TrackReference]:
        return [track.reference for track in self.collection]

    def tracks(self) -> list[TrackDetail]:
        return list(self.collection)


class ActivityStreamPage(BaseModel):
    """One page of a user's activity stream.

    Entries of unknown type, or that fail validation, are dropped while
    decoding so one odd entry cannot spoil the whole page.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    collection: list[ActivityEntry] = Field(default_factory=list)
    next_href: NonEmptyStr | None = None
    future_href: NonEmptyStr | None = None

    @field_validator("collection", mode="before")
    @classmethod
    def _drop_unusable_entries(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v

        kept: list[Any] = []
        for raw in v:
            if raw is None:
                continue
            if isinstance(raw, TrackActivity | PlaylistActivity):
                kept.append(raw)
                continue
            activity_type = raw.get("type") if isinstance(raw, dict) else None
            if activity_type not in KNOWN_ACTIVITY_TYPES:
                logger.warning(LogTemplates.CATALOG_UNKNOWN_ACTIVITY, activity_type)
                continue
            try:
                _ACTIVITY_ADAPTER.validate_python(raw)
            except PydanticValidationError as e:
                logger.warning(LogTemplates.CATALOG_INVALID_ACTIVITY, activity_type, e.error_count())
                continue
            kept.append(raw)
        return kept

    def tracks(self) -> list[TrackDetail]:
        """Return only the entries that carry a track, in stream order."""
        return [entry.origin for entry in self.collection if isinstance(entry, TrackActivity)]

    @property
    def references(self) -> list[TrackReference]:
        return [track.reference for track in self.tracks()]
