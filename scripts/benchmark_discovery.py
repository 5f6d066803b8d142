#!/usr/bin/env python3
"""Benchmark the discovery pipeline on synthetic listings.

Generates N jobs scattered around a service-area center with M bids each,
runs discover() once per sort key, and prints timing statistics.

Usage:
    python scripts/benchmark_discovery.py
    python scripts/benchmark_discovery.py --jobs 20000 --bids-per-job 8
    python scripts/benchmark_discovery.py --repeat 10 --query roof
"""

import argparse
import logging
import random
import statistics
import sys
import time
from pathlib import Path

# Ensure project root is on the path when run as a script
sys.path.insert(0, str(Path(__file__).parent.parent))

from job_discovery.core.categories import AVAILABLE_CATEGORIES
from job_discovery.core.config import SearchContext, ServiceAreaContext, SortState
from job_discovery.core.schemas import Bid, Coordinate, Job, JobLocation
from job_discovery.pipeline.orchestrator import discover

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

CENTER = Coordinate(latitude=44.6488, longitude=-63.5752)
SORT_KEYS = ("default", "price", "date", "category", "title", "location")
CITIES = ("Halifax", "Dartmouth", "Bedford", "Truro", "Lunenburg", None)
VERBS = ("Fix", "Replace", "Install", "Inspect", "Clean", "Repair")
NOUNS = ("faucet", "roof", "deck", "breaker", "furnace", "gutters", "window")


def _synthetic_jobs(count: int, rng: random.Random) -> list[Job]:
    jobs = []
    for i in range(count):
        location = None
        if rng.random() > 0.1:
            location = JobLocation(
                latitude=CENTER.latitude + rng.uniform(-1.0, 1.0),
                longitude=CENTER.longitude + rng.uniform(-1.0, 1.0),
                city=rng.choice(CITIES),
            )
        jobs.append(Job(
            id=i,
            title=f"{rng.choice(VERBS)} {rng.choice(NOUNS)}",
            budget=rng.choice([None, round(rng.uniform(50, 5000), 2)]),
            location=location,
            category_tags=rng.sample(AVAILABLE_CATEGORIES, k=rng.randint(0, 2)),
            created_at=f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}",
        ))
    return jobs


def _synthetic_bids(job_count: int, per_job: int, rng: random.Random) -> list[Bid]:
    bids = []
    for job_id in range(job_count):
        for _ in range(rng.randint(0, per_job * 2)):
            bids.append(Bid(
                id=len(bids),
                job_id=job_id,
                amount=round(rng.uniform(40, 6000), 2),
                status=rng.choice(["pending", "accepted", "rejected"]),
            ))
    return bids


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the discovery pipeline")
    parser.add_argument("--jobs", type=int, default=5000, help="Number of jobs (default: 5000)")
    parser.add_argument("--bids-per-job", type=int, default=4, help="Mean bids per job (default: 4)")
    parser.add_argument("--repeat", type=int, default=5, help="Runs per sort key (default: 5)")
    parser.add_argument("--radius", type=float, default=50.0, help="Service radius km (default: 50)")
    parser.add_argument("--query", default="", help="Search query (default: none)")
    parser.add_argument("--seed", type=int, default=7, help="Random seed (default: 7)")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    jobs = _synthetic_jobs(args.jobs, rng)
    bids = _synthetic_bids(args.jobs, args.bids_per_job, rng)
    search = SearchContext(query=args.query)
    area = ServiceAreaContext(center=CENTER, radius_km=args.radius, active=True)

    print(f"{len(jobs)} jobs, {len(bids)} bids, radius {args.radius:.0f} km, "
          f"query {args.query!r}, {args.repeat} runs per key\n")
    print(f"{'sort key':<10} {'results':>8} {'mean ms':>9} {'stdev':>8} {'min ms':>8}")
    print("-" * 47)

    for key in SORT_KEYS:
        timings = []
        result_count = 0
        for _ in range(args.repeat):
            start = time.perf_counter()
            results = discover(jobs, bids, search, area, SortState(key=key, direction="desc"))
            timings.append((time.perf_counter() - start) * 1000)
            result_count = len(results)
        stdev = statistics.stdev(timings) if len(timings) > 1 else 0.0
        print(f"{key:<10} {result_count:>8} {statistics.mean(timings):>9.2f} "
              f"{stdev:>8.2f} {min(timings):>8.2f}")


if __name__ == "__main__":
    main()
