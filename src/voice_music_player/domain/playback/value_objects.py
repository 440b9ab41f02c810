"""Immutable value objects for the playback bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator

from voice_music_player.domain.shared.messages import ErrorMessages


@dataclass(frozen=True)
class TrackReference:
    """Opaque locator of a catalog track, typically its API URI.

    Only compared for equality; never parsed.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_REFERENCE)

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)


def _to_track_reference(value: Any) -> TrackReference:
    if isinstance(value, TrackReference):
        return value
    if isinstance(value, str):
        return TrackReference(value)
    raise ValueError(f"Expected a track reference, got {type(value).__name__}")


# Pydantic-compatible type alias for TrackReference fields.
# Serializes as plain string, stores as TrackReference in the model.
TrackReferenceField = Annotated[
    TrackReference,
    PlainValidator(_to_track_reference),
    PlainSerializer(lambda v: v.value, return_type=str),
]


class PlaybackMode(Enum):
    """Selects the continuation protocol used to extend a queue."""

    TRACK_LIST = "track_list"  # search results, favorites
    STREAM = "stream"  # the user's activity stream, requires an auth token

    @property
    def requires_auth_token(self) -> bool:
        return self is PlaybackMode.STREAM
