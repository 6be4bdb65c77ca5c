"""Fan-out/fan-in coordinator for rename batches."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Collection, Iterable, Sequence
from typing import TYPE_CHECKING

from ...domain.nicknames.entities import BatchResult, Member, MutationOutcome
from ...domain.nicknames.pool import NamePool
from ...domain.nicknames.services import MemberSelector
from ...domain.nicknames.value_objects import SelectionPolicy
from ...domain.shared.constants import NicknameConstants
from ...domain.shared.messages import LogTemplates
from .mutation_worker import MutationWorker

if TYPE_CHECKING:
    from ..interfaces.member_gateway import MemberGateway

logger = logging.getLogger(__name__)


class BatchCoordinator:
    """Selects members, runs one worker per member concurrently, and collects outcomes.

    Outcomes come back in dispatch order regardless of completion order. A
    rejected rename only affects its own outcome. Structural errors are raised
    after every sibling has finished.

    If the caller is cancelled mid-batch, in-flight workers still run to
    completion (a rename already sent cannot be recalled) and their outcomes
    are discarded. ``drain`` waits for such orphaned batches.
    """

    def __init__(
        self,
        *,
        member_gateway: MemberGateway,
        selector: MemberSelector | None = None,
        fallback_label: str = NicknameConstants.FALLBACK_LABEL,
        max_concurrency: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._worker = MutationWorker(member_gateway=member_gateway)
        self._selector = selector or MemberSelector()
        self._fallback = fallback_label
        self._max_concurrency = max_concurrency
        self._rng = rng or random.Random()
        self._orphans: set[asyncio.Future[list[MutationOutcome | BaseException]]] = set()

    @property
    def selector(self) -> MemberSelector:
        return self._selector

    @property
    def orphaned_batches(self) -> int:
        return len(self._orphans)

    async def run_batch(
        self,
        guild_id: int,
        candidates: Sequence[Member],
        selection: SelectionPolicy,
        labels: Iterable[str],
        protected: Collection[int],
    ) -> BatchResult:
        protected_ids = frozenset(protected)
        selected = self._selector.select(selection, candidates, protected_ids)
        logger.info(
            LogTemplates.BATCH_STARTED,
            guild_id,
            selection.value,
            len(candidates),
            len(selected),
        )
        if not selected:
            return BatchResult.empty(guild_id)

        pool = NamePool(labels, fallback=self._fallback, rng=self._rng)
        semaphore = (
            asyncio.Semaphore(self._max_concurrency) if self._max_concurrency is not None else None
        )

        async def run_one(member: Member) -> MutationOutcome:
            if semaphore is None:
                return await self._worker.run(guild_id, member, pool, protected_ids)
            async with semaphore:
                return await self._worker.run(guild_id, member, pool, protected_ids)

        tasks = [asyncio.ensure_future(run_one(member)) for member in selected]
        batch = asyncio.gather(*tasks, return_exceptions=True)

        try:
            results = await asyncio.shield(batch)
        except asyncio.CancelledError:
            if not batch.done():
                self._orphans.add(batch)
                batch.add_done_callback(self._orphans.discard)
                logger.warning(
                    LogTemplates.BATCH_CANCELLED, guild_id, sum(not t.done() for t in tasks)
                )
            raise

        outcomes: list[MutationOutcome] = []
        for result in results:
            if isinstance(result, BaseException):
                raise result
            outcomes.append(result)

        batch_result = BatchResult(guild_id=guild_id, outcomes=tuple(outcomes))
        logger.info(
            LogTemplates.BATCH_FINISHED,
            guild_id,
            batch_result.succeeded,
            batch_result.skipped,
            batch_result.failed,
        )
        return batch_result

    async def drain(self) -> None:
        """Wait for batches whose caller was cancelled."""
        if not self._orphans:
            return
        pending = list(self._orphans)
        await asyncio.gather(*pending, return_exceptions=True)
        logger.info(LogTemplates.BATCH_ORPHANS_DRAINED, len(pending))
