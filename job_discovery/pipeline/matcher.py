"""Filter chain for job discovery.

Filter order:
  1. SearchFilter:      title/description text AND category tag
  2. ServiceAreaFilter: contractor's service radius, inclusive by default

Both predicates are pure: the same job and context always give the same answer.
"""

import logging
from collections.abc import Callable

from job_discovery.core.config import SearchContext, ServiceAreaContext
from job_discovery.core.schemas import DEFAULT_CATEGORY, Job
from job_discovery.pipeline.geo import haversine_km

logger = logging.getLogger(__name__)

# A filter is a callable that takes jobs and returns a subset, in input order.
Filter = Callable[[list[Job]], list[Job]]


def matches(job: Job, search: SearchContext) -> bool:
    """Return True if the job satisfies both the text query and the category."""
    query = search.query.strip().lower()
    category = search.category.strip().lower()
    if not query and not category:
        return True

    text_match = True
    if query:
        title = job.title if isinstance(job.title, str) else ""
        description = job.description if isinstance(job.description, str) else ""
        text_match = query in title.lower() or query in description.lower()

    category_match = True
    if category:
        tags = job.category_tags or [DEFAULT_CATEGORY]
        category_match = any(tag.lower() == category for tag in tags)

    return text_match and category_match


def distance_to_job(job: Job, area: ServiceAreaContext) -> float | None:
    """Kilometers from the service-area center to the job, when both are known."""
    if area.center is None or job.location is None:
        return None
    coordinate = job.location.coordinate
    if coordinate is None:
        return None
    return haversine_km(coordinate, area.center)


def is_in_range(job: Job, area: ServiceAreaContext) -> bool:
    """Return True if the job lies within the contractor's service area.

    Jobs are included whenever the area is inactive or unset, and whenever
    the job cannot be geolocated.
    """
    if not area.active or area.center is None:
        return True
    distance = distance_to_job(job, area)
    if distance is None:
        return True
    return distance <= area.radius_km


class SearchFilter:
    """Keep jobs matching the search context. Blank query and category pass everything."""

    def __init__(self, search: SearchContext) -> None:
        self._search = search

    def __call__(self, jobs: list[Job]) -> list[Job]:
        if self._search.is_wildcard:
            return jobs
        result = [j for j in jobs if matches(j, self._search)]
        removed = len(jobs) - len(result)
        if removed:
            logger.debug("SearchFilter: removed %d jobs", removed)
        return result


class ServiceAreaFilter:
    """Keep jobs inside the contractor's service area."""

    def __init__(self, area: ServiceAreaContext) -> None:
        self._area = area

    def __call__(self, jobs: list[Job]) -> list[Job]:
        if not self._area.active or self._area.center is None:
            return jobs
        result = [j for j in jobs if is_in_range(j, self._area)]
        removed = len(jobs) - len(result)
        if removed:
            logger.debug(
                "ServiceAreaFilter: removed %d jobs outside %.1f km",
                removed, self._area.radius_km,
            )
        return result


def run_filter_chain(jobs: list[Job], filters: list[Filter]) -> list[Job]:
    """Apply filters in order, returning the surviving jobs."""
    result = jobs
    for f in filters:
        result = f(result)
    return result
