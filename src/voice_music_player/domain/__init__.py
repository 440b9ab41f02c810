"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, messages and exceptions
- playback/: Per-user playback session state and navigation rules
- catalog/: Remote catalog tracks, users and paginated pages
"""

from voice_music_player.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
