"""Errors raised by the playback bounded context."""

from __future__ import annotations

from typing import TYPE_CHECKING

from voice_music_player.domain.shared.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    InvalidOperationError,
)
from voice_music_player.domain.shared.messages import ErrorMessages

if TYPE_CHECKING:
    from voice_music_player.domain.playback.value_objects import TrackReference


class NoPlaybackStateError(EntityNotFoundError):
    """The user has never started a playback session."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            "PlaybackState",
            user_id,
            ErrorMessages.NO_PLAYBACK_STATE.format(user_id=user_id),
        )
        self.user_id = user_id


class TrackNotFoundInQueueError(BusinessRuleViolationError):
    """A playing track is no longer part of the stored queue.

    The playback surface and the stored session have drifted apart; this is a
    logic error, not a transient condition.
    """

    def __init__(self, user_id: str, reference: TrackReference) -> None:
        super().__init__(
            rule="TRACK_IN_QUEUE",
            message=ErrorMessages.TRACK_NOT_IN_QUEUE.format(
                reference=reference, user_id=user_id
            ),
        )
        self.user_id = user_id
        self.reference = reference


class MissingAuthTokenError(InvalidOperationError):
    """A stream continuation was requested without an auth token.

    Raised for a broken caller contract; it is not meant to be shown to users.
    """

    def __init__(self, user_id: str) -> None:
        super().__init__(
            operation="continue activity stream",
            current_state="no auth token",
            message=ErrorMessages.MISSING_AUTH_TOKEN.format(user_id=user_id),
        )
        self.user_id = user_id
