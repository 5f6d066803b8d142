"""Orchestrator: wires input validation, filter chain, bid stats, and sort.

Data flow:
  1. Validate raw jobs and bids (malformed input → empty result)
  2. SearchFilter → text/category matches
  3. ServiceAreaFilter → jobs inside the service radius
  4. Annotate each job with BidStats and distance
  5. Sort

Every stage runs over the full output of the previous one. An empty result
after filtering is returned as-is, never widened back to the unfiltered set.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from job_discovery.core.config import SearchContext, ServiceAreaContext, Settings, SortState
from job_discovery.core.schemas import AnnotatedJob, Bid, Job
from job_discovery.pipeline.bid_stats import BidStatsIndex
from job_discovery.pipeline.matcher import (
    Filter,
    SearchFilter,
    ServiceAreaFilter,
    distance_to_job,
    run_filter_chain,
)
from job_discovery.pipeline.sorter import sort_jobs

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class DiscoveryResult:
    """Outcome of one discovery run, with per-stage counts."""

    def __init__(
        self,
        raw_count: int,
        matched_count: int,
        in_area_count: int,
        jobs: list[AnnotatedJob],
        malformed: bool = False,
    ) -> None:
        self.raw_count = raw_count
        self.matched_count = matched_count
        self.in_area_count = in_area_count
        self.jobs = jobs
        self.malformed = malformed


def run_discovery(
    jobs: Any,
    bids: Any,
    search: SearchContext | None = None,
    area: ServiceAreaContext | None = None,
    sort: SortState | None = None,
) -> DiscoveryResult:
    """Run the full pipeline and report how many jobs survived each stage.

    Never raises on bad input: a malformed listing yields an empty result
    flagged ``malformed=True`` so callers can tell it from "no jobs found".
    """
    search = search or SearchContext()
    area = area or ServiceAreaContext()
    sort = sort or SortState()

    parsed_jobs = _validate_records(jobs, Job, "jobs")
    parsed_bids = _validate_records(bids, Bid, "bids")
    if parsed_jobs is None or parsed_bids is None:
        return DiscoveryResult(0, 0, 0, [], malformed=True)

    # Step 1: text and category
    matched = SearchFilter(search)(parsed_jobs)

    # Step 2: service area
    in_area = ServiceAreaFilter(area)(matched)

    # Step 3: annotate
    index = BidStatsIndex(parsed_bids)
    annotated = [
        AnnotatedJob(
            job=job,
            bid_stats=index.stats_for(job.id),
            distance_km=distance_to_job(job, area) if area.active else None,
        )
        for job in in_area
    ]

    # Step 4: sort
    ranked = sort_jobs(annotated, sort)

    logger.info(
        "Discovery: %d raw, %d matched, %d in service area",
        len(parsed_jobs), len(matched), len(in_area),
    )
    if not ranked:
        logger.info("No jobs found for query=%r category=%r", search.query, search.category)

    return DiscoveryResult(
        raw_count=len(parsed_jobs),
        matched_count=len(matched),
        in_area_count=len(in_area),
        jobs=ranked,
    )


def discover(
    jobs: Any,
    bids: Any,
    search: SearchContext | None = None,
    area: ServiceAreaContext | None = None,
    sort: SortState | None = None,
) -> list[AnnotatedJob]:
    """Ranked, filtered, annotated jobs for a contractor.

    Args:
        jobs: Sequence of Job models or raw job mappings.
        bids: Sequence of Bid models or raw bid mappings.
        search: Text/category filter; blank matches everything.
        area: Service area; inactive includes every job.
        sort: Sort key and direction.

    Returns:
        A new list of AnnotatedJob. Empty when nothing matches or when the
        input is malformed.
    """
    return run_discovery(jobs, bids, search, area, sort).jobs


def discover_with_settings(jobs: Any, bids: Any, settings: Settings) -> DiscoveryResult:
    """Run discovery with the contexts held by ``settings``."""
    return run_discovery(jobs, bids, settings.search, settings.service_area, settings.sort)


def filter_jobs(
    jobs: Any,
    search: SearchContext | None = None,
    area: ServiceAreaContext | None = None,
) -> list[Job]:
    """Search and service-area filtering only, unannotated and in input order.

    For surfaces such as the map view that want geo-scoped jobs without ranking.
    """
    parsed = _validate_records(jobs, Job, "jobs")
    if parsed is None:
        return []
    filters: list[Filter] = [
        SearchFilter(search or SearchContext()),
        ServiceAreaFilter(area or ServiceAreaContext()),
    ]
    return run_filter_chain(parsed, filters)


def export_results_json(results: list[AnnotatedJob]) -> str:
    """Export annotated jobs as a JSON string."""
    data = []
    for r in results:
        j = r.job
        data.append({
            "id": j.id,
            "title": j.title,
            "status": j.status,
            "budget": j.budget,
            "category": j.primary_category,
            "city": j.location.city if j.location else None,
            "state": j.location.state if j.location else None,
            "is_urgent": j.is_urgent,
            "created_at": j.created_at.isoformat() if j.created_at else None,
            "bid_count": r.bid_stats.count,
            "min_bid": r.bid_stats.min_amount,
            "max_bid": r.bid_stats.max_amount,
            "avg_bid": r.bid_stats.avg_amount,
            "distance_km": r.distance_km,
        })
    return json.dumps(data, indent=2)


def _validate_records(records: Any, model: type[M], label: str) -> list[M] | None:
    """Validate a raw listing into models, or return None if it is malformed."""
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        logger.warning("Malformed %s: expected a sequence, got %s", label, type(records).__name__)
        return None

    parsed: list[M] = []
    for i, record in enumerate(records):
        if isinstance(record, model):
            parsed.append(record)
        elif isinstance(record, Mapping):
            try:
                parsed.append(model.model_validate(dict(record)))
            except ValidationError as e:
                logger.warning(
                    "Malformed %s: record %d failed validation (%d errors)",
                    label, i, e.error_count(),
                )
                return None
        else:
            logger.warning("Malformed %s: record %d is a %s", label, i, type(record).__name__)
            return None
    return parsed
