"""Errors raised when talking to the remote catalog."""

from __future__ import annotations

from typing import Any

from voice_music_player.domain.shared.exceptions import DomainError
from voice_music_player.domain.shared.messages import ErrorMessages


class RemoteFetchError(DomainError):
    """A catalog request failed (transport, HTTP status or payload)."""

    code = "REMOTE_FETCH_FAILED"

    def __init__(self, url: str, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status

    def details(self) -> dict[str, Any]:
        return {"url": self.url, "status": self.status}


class TrackNotStreamableError(RemoteFetchError):
    """The catalog refused to hand out a stream location for a track."""

    code = "TRACK_NOT_STREAMABLE"

    def __init__(self, url: str, reference: str, status: int | None = None) -> None:
        if status is None:
            message = ErrorMessages.STREAM_URL_MISSING.format(reference=reference)
        else:
            message = ErrorMessages.TRACK_NOT_STREAMABLE.format(reference=reference, status=status)
        super().__init__(url, message, status=status)
        self.reference = reference

    def details(self) -> dict[str, Any]:
        return {**super().details(), "reference": self.reference}
