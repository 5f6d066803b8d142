"""Sort engine: orders jobs by one key with a direction flag.

All sorts are stable. Ties keep their input order in both directions, so
flipping asc/desc on an already-sorted list never swaps equal jobs.
The "default" key keeps the input order, which carries any upstream ranking.
"""

import logging
import math
import unicodedata
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from job_discovery.core.config import SortState
from job_discovery.core.schemas import AnnotatedJob, Job

logger = logging.getLogger(__name__)

T = TypeVar("T", Job, AnnotatedJob)


def collation_key(text: str) -> tuple[str, str, str]:
    """Locale-style ordering key.

    Accents and case are ignored first, then lowercase sorts before
    uppercase, then the raw string settles anything left.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), base.swapcase(), text)


def epoch_millis(value: datetime | None) -> float:
    """Milliseconds since the epoch; missing timestamps count as the epoch itself."""
    if value is None:
        return 0.0
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp() * 1000


def _price(job: Job) -> float:
    if job.budget is None or not math.isfinite(job.budget):
        return 0.0
    return job.budget


def _date(job: Job) -> float:
    return epoch_millis(job.created_at)


def _category(job: Job) -> tuple[str, str, str]:
    return collation_key(job.category_tags[0] if job.category_tags else "")


def _title(job: Job) -> tuple[str, str, str]:
    return collation_key(job.title or "")


def _location(job: Job) -> tuple[str, str, str]:
    city = job.location.city if job.location is not None else None
    return collation_key(city or "")


_SORT_KEYS: dict[str, Callable[[Job], Any]] = {
    "price": _price,
    "date": _date,
    "category": _category,
    "title": _title,
    "location": _location,
}


def _unwrap(item: Job | AnnotatedJob) -> Job:
    return item.job if isinstance(item, AnnotatedJob) else item


def sort_jobs(jobs: Sequence[T], state: SortState) -> list[T]:
    """Return a new list of ``jobs`` ordered by ``state``. The input is untouched."""
    key_fn = _SORT_KEYS.get(state.key)
    if key_fn is None:
        return list(jobs)

    logger.debug("Sorting %d jobs by %s %s", len(jobs), state.key, state.direction)
    return sorted(
        jobs,
        key=lambda item: key_fn(_unwrap(item)),
        reverse=state.direction == "desc",
    )
