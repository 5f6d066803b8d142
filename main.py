"""CLI entry point for the job discovery engine."""

import argparse
import logging
import sys

from job_discovery.core.categories import (
    AVAILABLE_CATEGORIES,
    category_display_name,
    category_value,
)
from job_discovery.core.config import SearchContext, Settings, SortState
from job_discovery.core.loader import load_records
from job_discovery.core.schemas import AnnotatedJob
from job_discovery.pipeline.orchestrator import discover_with_settings, export_results_json

SORT_KEYS = ["default", "price", "date", "category", "title", "location"]


def _add_discover_arguments(parser: argparse.ArgumentParser, *, suppress: bool = False) -> None:
    def h(text: str) -> str:
        return argparse.SUPPRESS if suppress else text

    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help=h("Path to settings YAML file (default: config/settings.yaml)"),
    )
    parser.add_argument("--jobs", help=h("Path to jobs JSON (overrides data.jobs_path)"))
    parser.add_argument("--bids", help=h("Path to bids JSON (overrides data.bids_path)"))
    parser.add_argument("--query", "-q", help=h("Free-text search over title and description"))
    parser.add_argument("--category", "-c", help=h("Category filter, e.g. Plumbing (all: any category)"))
    parser.add_argument("--sort", choices=SORT_KEYS, help=h("Sort key"))
    parser.add_argument("--order", choices=["asc", "desc"], help=h("Sort direction"))
    parser.add_argument(
        "--no-service-area",
        action="store_true",
        help=h("Ignore the configured service area"),
    )
    parser.add_argument("--export", choices=["json"], help=h("Export results to format (json)"))
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help=h("Enable verbose (DEBUG) logging"),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job discovery engine - filter, scope and rank jobs for a contractor",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- discover subcommand (default) ---
    discover_parser = subparsers.add_parser("discover", help="Discover jobs for a contractor")
    _add_discover_arguments(discover_parser)

    # --- categories subcommand ---
    categories_parser = subparsers.add_parser("categories", help="List job categories")
    categories_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- top-level flags apply to discover ---
    _add_discover_arguments(parser, suppress=True)

    args = parser.parse_args(argv)

    if args.command is None:
        args.command = "discover"

    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with any command-line overrides applied."""
    search = settings.search
    if args.query is not None or args.category is not None:
        search = SearchContext(
            query=args.query if args.query is not None else search.query,
            category=args.category if args.category is not None else search.category,
        )

    sort = settings.sort
    if args.sort is not None or args.order is not None:
        sort = SortState(key=args.sort or sort.key, direction=args.order or sort.direction)

    area = settings.service_area
    if args.no_service_area:
        area = area.model_copy(update={"active": False})

    data = settings.data.model_copy(update={
        "jobs_path": args.jobs or settings.data.jobs_path,
        "bids_path": args.bids or settings.data.bids_path,
    })

    return settings.model_copy(update={
        "search": search, "sort": sort, "service_area": area, "data": data,
    })


def format_job_line(annotated: AnnotatedJob) -> str:
    job = annotated.job
    stats = annotated.bid_stats
    category = category_display_name(category_value(job.primary_category))
    budget = f"${job.budget:,.2f}" if job.budget is not None else "no budget"
    if stats.count:
        bids = (
            f"{stats.count} bids (min ${stats.min_amount:,.2f}, "
            f"avg ${stats.avg_amount:,.2f}, max ${stats.max_amount:,.2f})"
        )
    else:
        bids = "no bids"
    line = f"  #{job.id} {job.title} [{category}] {budget}, {bids}"
    if annotated.distance_km is not None:
        line += f", {annotated.distance_km:.1f} km"
    if job.is_urgent:
        line += " URGENT"
    return line


def cmd_discover(settings: Settings, export_format: str | None) -> None:
    """Run discovery over the configured listings and print the ranked jobs."""
    jobs = load_records(settings.data.jobs_path, key="jobs")
    bids = load_records(settings.data.bids_path, key="bids")

    result = discover_with_settings(jobs, bids, settings)

    if result.malformed:
        print("Error: job or bid listing is malformed; no results", file=sys.stderr)
        sys.exit(1)

    print(f"Discovery complete: {result.raw_count} raw, {result.matched_count} matched, "
          f"{result.in_area_count} in service area.")

    if not result.jobs:
        print("No jobs found.")
        return

    print(f"Sorted by {settings.sort.key} ({settings.sort.direction}):")
    for annotated in result.jobs:
        print(format_job_line(annotated))

    if export_format == "json":
        print(f"\n{export_results_json(result.jobs)}")


def cmd_categories() -> None:
    """Print the category catalog with filter values."""
    for name in AVAILABLE_CATEGORIES:
        print(f"  {category_value(name):<22} {name}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "categories":
        cmd_categories()
        return

    try:
        settings = apply_overrides(Settings.from_yaml(args.config), args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        cmd_discover(settings, args.export)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
