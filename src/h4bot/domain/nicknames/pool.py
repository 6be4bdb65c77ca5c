"""Per-batch pool of nickname labels, drawn without replacement."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Iterable

from h4bot.domain.shared.constants import NicknameConstants
from h4bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class NamePool:
    """Shared label source for the workers of one rename batch.

    Every draw removes a random label so no two members of the same batch get
    the same one. Once the pool is empty each draw returns the fallback label
    and leaves the pool untouched.
    """

    def __init__(
        self,
        labels: Iterable[str],
        *,
        fallback: str = NicknameConstants.FALLBACK_LABEL,
        rng: random.Random | None = None,
    ) -> None:
        self._labels: list[str] = list(labels)
        self._fallback = fallback
        self._rng = rng or random.Random()
        self._lock = asyncio.Lock()

    @property
    def fallback(self) -> str:
        return self._fallback

    @property
    def remaining(self) -> int:
        return len(self._labels)

    async def draw(self) -> str:
        async with self._lock:
            if not self._labels:
                logger.debug(LogTemplates.POOL_EXHAUSTED, self._fallback)
                return self._fallback
            index = self._rng.randrange(len(self._labels))
            # Swap-remove; order inside the pool carries no meaning.
            self._labels[index], self._labels[-1] = self._labels[-1], self._labels[index]
            return self._labels.pop()
