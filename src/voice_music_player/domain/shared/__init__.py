"""
Shared Domain Kernel

Contains exceptions, constrained types and message constants shared across
all bounded contexts.
"""

from voice_music_player.domain.shared.exceptions import (
    BusinessRuleViolationError,
    ConcurrencyError,
    DomainError,
    EntityNotFoundError,
    InvalidOperationError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "ConcurrencyError",
    "InvalidOperationError",
]
