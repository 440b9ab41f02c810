"""
Follow Artist Command

Follows the uploader of the track a listener is hearing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ...domain.playback.value_objects import TrackReference
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..interfaces.remote_catalog import RemoteCatalog

logger = logging.getLogger(__name__)


class FollowStatus(Enum):
    FOLLOWED = "followed"
    ALREADY_FOLLOWING = "already_following"
    NO_UPLOADER = "no_uploader"


@dataclass
class FollowArtistCommand:
    """Command to follow whoever uploaded the track at ``reference``."""

    user_id: str
    reference: TrackReference
    access_token: str

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("User ID cannot be empty")
        if not self.access_token:
            raise ValueError("Access token cannot be empty")


@dataclass
class FollowResult:
    status: FollowStatus
    artist: str | None = None
    avatar_url: str | None = None

    @property
    def is_new_follow(self) -> bool:
        return self.status == FollowStatus.FOLLOWED

    @classmethod
    def followed(cls, artist: str, avatar_url: str | None) -> FollowResult:
        return cls(status=FollowStatus.FOLLOWED, artist=artist, avatar_url=avatar_url)

    @classmethod
    def already_following(cls, artist: str) -> FollowResult:
        return cls(status=FollowStatus.ALREADY_FOLLOWING, artist=artist)

    @classmethod
    def no_uploader(cls) -> FollowResult:
        return cls(status=FollowStatus.NO_UPLOADER)

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "artist": self.artist, "avatar_url": self.avatar_url}


class FollowArtistHandler:
    """Handler for FollowArtistCommand."""

    def __init__(self, *, catalog: RemoteCatalog) -> None:
        self._catalog = catalog

    async def handle(self, command: FollowArtistCommand) -> FollowResult:
        """Execute the follow command.

        Returns:
            FOLLOWED for a new follow, ALREADY_FOLLOWING when nothing changed,
            NO_UPLOADER when the catalog did not say who uploaded the track.

        Raises:
            RemoteFetchError: If a catalog request failed.
        """
        track = await self._catalog.resolve_track(command.reference)
        if track.user is None:
            logger.warning(LogTemplates.FOLLOW_NO_UPLOADER, command.reference, command.user_id)
            return FollowResult.no_uploader()

        if await self._catalog.follow_user(command.access_token, track.user):
            return FollowResult.followed(track.user.username, track.user.avatar_url)
        return FollowResult.already_following(track.user.username)
