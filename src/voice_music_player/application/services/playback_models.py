"""Result objects returned by the playback session service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ...domain.playback.value_objects import TrackReference, TrackReferenceField
from ...domain.shared.types import OffsetMs


class NavigationStatus(Enum):
    """Outcome of a navigation call."""

    ADVANCED = "advanced"
    WRAPPED = "wrapped"
    CONTINUED = "continued"
    REWOUND = "rewound"
    RESTARTED = "restarted"
    END_OF_QUEUE = "end_of_queue"
    START_OF_QUEUE = "start_of_queue"
    EMPTY_CONTINUATION = "empty_continuation"
    EMPTY_QUEUE = "empty_queue"

    @property
    def has_track(self) -> bool:
        return self in _STATUSES_WITH_TRACK


_STATUSES_WITH_TRACK = frozenset(
    {
        NavigationStatus.ADVANCED,
        NavigationStatus.WRAPPED,
        NavigationStatus.CONTINUED,
        NavigationStatus.REWOUND,
        NavigationStatus.RESTARTED,
    }
)


@dataclass(frozen=True)
class NavigationResult:
    """A track to play next, or a named reason why there is none."""

    status: NavigationStatus
    track: TrackReference | None = None
    position: int | None = None

    def __post_init__(self) -> None:
        if self.status.has_track != (self.track is not None):
            raise ValueError(f"Navigation status {self.status.value} does not match track {self.track!r}")

    @property
    def is_available(self) -> bool:
        return self.track is not None

    @classmethod
    def advanced(cls, track: TrackReference, position: int) -> NavigationResult:
        return cls(NavigationStatus.ADVANCED, track, position)

    @classmethod
    def wrapped(cls, track: TrackReference) -> NavigationResult:
        return cls(NavigationStatus.WRAPPED, track, 0)

    @classmethod
    def continued(cls, track: TrackReference, position: int) -> NavigationResult:
        return cls(NavigationStatus.CONTINUED, track, position)

    @classmethod
    def rewound(cls, track: TrackReference, position: int) -> NavigationResult:
        return cls(NavigationStatus.REWOUND, track, position)

    @classmethod
    def restarted(cls, track: TrackReference) -> NavigationResult:
        return cls(NavigationStatus.RESTARTED, track, 0)

    @classmethod
    def nothing(cls, status: NavigationStatus) -> NavigationResult:
        """Create a result without a track."""
        return cls(status)

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "track": str(self.track) if self.track is not None else None,
            "position": self.position,
        }


class ResumePoint(BaseModel):
    """Where an interrupted session picks up again."""

    model_config = ConfigDict(frozen=True)

    track: TrackReferenceField
    position: int
    offset_ms: OffsetMs = 0
