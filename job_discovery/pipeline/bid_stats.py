"""Bid statistics: count, min, max and mean of the bids placed on a job.

Every bid counts regardless of status; this measures bidding activity, not
outcome.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable

from job_discovery.core.schemas import Bid, BidStats

logger = logging.getLogger(__name__)


def _stats_from_amounts(amounts: list[float]) -> BidStats:
    if not amounts:
        return BidStats()
    return BidStats(
        count=len(amounts),
        min_amount=min(amounts),
        max_amount=max(amounts),
        avg_amount=sum(amounts) / len(amounts),
    )


def aggregate(job_id: int, bids: Iterable[Bid]) -> BidStats:
    """Reduce the bids placed on ``job_id`` into a BidStats."""
    return _stats_from_amounts([b.amount for b in bids if b.job_id == job_id])


class BidStatsIndex:
    """Bids grouped by job, so annotating many jobs takes a single pass.

    ``index.stats_for(job_id)`` equals ``aggregate(job_id, bids)``.
    Build one per discovery request; it holds no state beyond its bids.
    """

    def __init__(self, bids: Iterable[Bid]) -> None:
        self._amounts: dict[int, list[float]] = defaultdict(list)
        for b in bids:
            self._amounts[b.job_id].append(b.amount)
        self._cache: dict[int, BidStats] = {}
        logger.debug("BidStatsIndex: %d jobs with bids", len(self._amounts))

    def stats_for(self, job_id: int) -> BidStats:
        stats = self._cache.get(job_id)
        if stats is None:
            stats = _stats_from_amounts(self._amounts.get(job_id, []))
            self._cache[job_id] = stats
        return stats
