"""Port interface for resolving source references to playable tracks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from h4bot.domain.shared.types import NonEmptyStr

if TYPE_CHECKING:
    from ...domain.music.entities import Track


class AudioResolver(ABC):
    """Interface for resolving URLs to playable tracks."""

    @abstractmethod
    async def resolve(self, source_ref: NonEmptyStr) -> "Track | None":
        """Resolve a URL to a playable track.

        Raises:
            ResolutionError: If extraction fails outright.
        """
        ...

    @abstractmethod
    def is_url(self, source_ref: str) -> bool:
        ...
