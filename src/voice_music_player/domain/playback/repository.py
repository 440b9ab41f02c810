"""
Playback Domain Repository Interfaces

Abstract base classes defining the contracts for session persistence.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from voice_music_player.domain.playback.entities import PlaybackState


class SessionStore(ABC):
    """Abstract durable store for per-user playback sessions.

    Besides full replacement the store offers narrow field updates. Each
    narrow update is its own write: there is no transaction spanning several
    calls, and two racing updates for the same user resolve as last writer
    wins. Only ``put`` with ``expected`` performs a conditional write.
    """

    @abstractmethod
    async def get(self, user_id: str) -> PlaybackState:
        """Load the session of a user.

        Args:
            user_id: The voice platform user ID.

        Returns:
            The stored playback state.

        Raises:
            NoPlaybackStateError: If the user has no session.
        """
        ...

    @abstractmethod
    async def exists(self, user_id: str) -> bool:
        """Check if a session exists for a user.

        Args:
            user_id: The voice platform user ID.

        Returns:
            True if a session exists.
        """
        ...

    @abstractmethod
    async def put(self, state: PlaybackState, *, expected: PlaybackState | None = None) -> None:
        """Replace the stored session of ``state.user_id`` wholesale.

        Args:
            state: The new session state.
            expected: The state a continuation append was computed from. When
                given, only the queue, cursor and position are written, and
                only if the stored record still has the same cursor and queue
                length. Flags and offset keep whatever is stored.

        Raises:
            ConcurrencyError: If ``expected`` no longer matches the stored record.
        """
        ...

    @abstractmethod
    async def update_position(self, user_id: str, position: int) -> None:
        """Set the play position only.

        Raises:
            NoPlaybackStateError: If the user has no session.
        """
        ...

    @abstractmethod
    async def update_offset_and_position(self, user_id: str, offset_ms: int, position: int) -> None:
        """Set the playback offset and the play position in one write.

        Raises:
            NoPlaybackStateError: If the user has no session.
        """
        ...

    @abstractmethod
    async def update_looping(self, user_id: str, looping: bool) -> None:
        """Set the looping flag only.

        Raises:
            NoPlaybackStateError: If the user has no session.
        """
        ...

    @abstractmethod
    async def update_shuffle(self, user_id: str, shuffle: bool) -> None:
        """Set the shuffle flag only.

        Raises:
            NoPlaybackStateError: If the user has no session.
        """
        ...
