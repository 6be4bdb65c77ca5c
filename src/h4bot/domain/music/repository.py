"""
Music Domain Repository Interfaces

Abstract base classes defining the contracts for session storage.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from h4bot.domain.music.entities import VoiceSession


class SessionRepository(ABC):
    """Abstract repository for voice sessions, one per guild."""

    @abstractmethod
    async def get(self, guild_id: int) -> VoiceSession | None:
        """Retrieve a session by guild ID.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            The session if found, None otherwise.
        """
        ...

    @abstractmethod
    async def create(self, guild_id: int, channel_id: int) -> VoiceSession:
        """Create and store a session bound to ``channel_id``.

        Replaces any session already stored for the guild.
        """
        ...

    @abstractmethod
    async def delete(self, guild_id: int) -> bool:
        """Delete a session by guild ID.

        Returns:
            True if a session was removed.
        """
        ...

    @abstractmethod
    async def exists(self, guild_id: int) -> bool:
        ...

    @abstractmethod
    async def all(self) -> list[VoiceSession]:
        """Return every live session."""
        ...
