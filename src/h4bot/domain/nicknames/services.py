"""Domain service choosing which members a rename batch touches."""

from __future__ import annotations

import random
from collections.abc import Collection, Sequence

from h4bot.domain.nicknames.entities import Member
from h4bot.domain.nicknames.value_objects import SelectionPolicy
from h4bot.domain.shared.constants import NicknameConstants


class MemberSelector:
    """Pure selection policies over a candidate list.

    Randomness comes from the injected ``random.Random`` so tests can seed it.
    """

    def __init__(
        self,
        *,
        min_count: int = NicknameConstants.MULTIPLE_MIN_COUNT,
        rng: random.Random | None = None,
    ) -> None:
        if min_count < 1:
            raise ValueError("min_count must be at least 1")
        self._min_count = min_count
        self._rng = rng or random.Random()

    @property
    def min_count(self) -> int:
        return self._min_count

    def select(
        self,
        policy: SelectionPolicy,
        candidates: Sequence[Member],
        protected: Collection[int] = frozenset(),
    ) -> list[Member]:
        if not candidates:
            return []

        if policy is SelectionPolicy.SINGLE:
            return self.select_single(candidates, protected)
        if policy is SelectionPolicy.MULTIPLE:
            return self.select_multiple(candidates, protected)
        return list(candidates)

    def select_single(
        self, candidates: Sequence[Member], protected: Collection[int]
    ) -> list[Member]:
        """Pick one eligible member; protected members are filtered out up front."""
        eligible = [m for m in candidates if m.id not in protected]
        if not eligible:
            return []
        return [self._rng.choice(eligible)]

    def select_multiple(
        self, candidates: Sequence[Member], protected: Collection[int] = frozenset()
    ) -> list[Member]:
        """Pick ``k`` distinct eligible members with ``min_count <= k < n``.

        ``n`` counts eligible members only, so protected identities never take
        a slot. Small guilds (``n <= min_count``) get every eligible member.
        """
        eligible = [m for m in candidates if m.id not in protected]
        n = len(eligible)
        if n <= self._min_count:
            return eligible
        k = self._rng.randrange(self._min_count, n)
        return self._rng.sample(eligible, k)
