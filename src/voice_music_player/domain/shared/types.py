"""Constrained ``Annotated`` aliases used by the pydantic models.

Import the alias instead of repeating ``Field`` bounds on each model::

    from voice_music_player.domain.shared.types import OffsetMs, UserIdStr

    class Bookmark(BaseModel):
        user_id: UserIdStr
        offset_ms: OffsetMs
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Text ────────────────────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""Absolute http(s) URL, kept as a plain string."""

UserIdStr = Annotated[str, Field(min_length=1, max_length=512)]
"""Voice platform user id."""


# ── Counters and positions ──────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]

QueuePositionInt = Annotated[int, Field(ge=0)]
"""Index into a session queue."""

OffsetMs = Annotated[int, Field(ge=0)]
"""Milliseconds into the current track."""

DurationMs = Annotated[int, Field(ge=0)]


# ── Timeouts ────────────────────────────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""How long SQLite waits on a locked database."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]

HttpTimeoutS = Annotated[float, Field(gt=0.0, le=120.0)]
"""Per-request timeout for catalog calls."""
