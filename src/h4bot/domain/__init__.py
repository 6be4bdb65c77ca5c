"""
Domain Layer

Pure business logic organized by bounded contexts:
- shared/: cross-cutting types, constants, messages and exceptions
- nicknames/: name pool, member selection and batch outcomes
- music/: tracks, playback queue and voice sessions
"""

from h4bot.domain.shared.exceptions import DomainError

__all__ = ["DomainError"]
