"""Core domain entities for the playback bounded context."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from voice_music_player.domain.playback.exceptions import TrackNotFoundInQueueError
from voice_music_player.domain.playback.value_objects import (
    PlaybackMode,
    TrackReference,
    TrackReferenceField,
)
from voice_music_player.domain.shared.exceptions import InvalidOperationError
from voice_music_player.domain.shared.messages import ErrorMessages
from voice_music_player.domain.shared.types import (
    NonEmptyStr,
    OffsetMs,
    QueuePositionInt,
    UserIdStr,
)


class PlaybackState(BaseModel):
    """Aggregate root tracking where a listener is in a lazily paginated queue.

    The queue only ever grows at the tail while a session lives; ``cursor`` is
    the continuation token for the next catalog page and ``None`` once the
    catalog is exhausted. Instances are immutable: every change produces a
    validated copy.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    user_id: UserIdStr
    queue: tuple[TrackReferenceField, ...] = ()
    position: QueuePositionInt = 0
    cursor: NonEmptyStr | None = None
    offset_ms: OffsetMs = 0
    looping: bool = False
    shuffle: bool = False  # recorded only, does not change the order
    mode: PlaybackMode = PlaybackMode.TRACK_LIST

    @model_validator(mode="after")
    def _position_within_queue(self) -> PlaybackState:
        length = len(self.queue)
        if (length and self.position >= length) or (not length and self.position != 0):
            raise ValueError(
                ErrorMessages.POSITION_OUT_OF_RANGE.format(position=self.position, length=length)
            )
        return self

    @classmethod
    def start(
        cls,
        user_id: str,
        tracks: Sequence[TrackReference],
        cursor: str | None,
        mode: PlaybackMode,
    ) -> PlaybackState:
        """Create a fresh session positioned at the first track."""
        return cls(user_id=user_id, queue=tuple(tracks), cursor=cursor, mode=mode)

    @property
    def queue_length(self) -> int:
        return len(self.queue)

    @property
    def is_empty(self) -> bool:
        return not self.queue

    @property
    def has_more_pages(self) -> bool:
        return self.cursor is not None

    @property
    def is_at_tail(self) -> bool:
        return bool(self.queue) and self.position == len(self.queue) - 1

    @property
    def current_track(self) -> TrackReference | None:
        return self.queue[self.position] if self.queue else None

    def track_at(self, index: int) -> TrackReference:
        return self.queue[index]

    def next_index(self) -> int | None:
        """Index to play next without contacting the catalog, if any.

        Wrapping to the start only happens once the catalog is exhausted; while
        a cursor remains the caller has to fetch the next page instead.
        """
        if self.position + 1 < len(self.queue):
            return self.position + 1
        if self.is_at_tail and self.looping and self.cursor is None:
            return 0
        return None

    def previous_index(self) -> int | None:
        """Index of the previous track. Never wraps, even when looping."""
        if self.position > 0:
            return self.position - 1
        return None

    def index_of(self, reference: TrackReference) -> int:
        """Return the first index of ``reference`` in the queue."""
        try:
            return self.queue.index(reference)
        except ValueError:
            raise TrackNotFoundInQueueError(self.user_id, reference) from None

    def with_page(
        self, references: Sequence[TrackReference], next_cursor: str | None
    ) -> PlaybackState:
        """Return a copy with a continuation page appended.

        The position moves to the first appended track; an empty page only
        replaces the cursor.
        """
        if self.cursor is None:
            raise InvalidOperationError(
                operation="append continuation page",
                current_state="catalog exhausted",
                message=ErrorMessages.CATALOG_EXHAUSTED,
            )
        position = len(self.queue) if references else self.position
        return self._replace(
            queue=(*self.queue, *references),
            cursor=next_cursor,
            position=position,
        )

    def _replace(self, **changes: Any) -> PlaybackState:
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(changes)
        return type(self)(**values)
