"""
Route Planner - Command-line entry point.

Loads a routes CSV file, prints the connections of the resulting graph
and the cheapest route from the fixed origin to the requested city.

Usage:
    route-planner --filepath routes.csv --to 2
    python -m src.route_planner --filepath routes.csv --to 2
"""

import argparse
import logging
import sys
from typing import List, Optional

from pandera.errors import SchemaError, SchemaErrors

from src.route_planner.adapters.data_providers.csv_provider import CSV_EXAMPLE
from src.route_planner.application.plan_cheapest_route import PlanCheapestRoute
from src.route_planner.config import PlannerConfig
from src.route_planner.exceptions import RoutePlannerError
from src.route_planner.services.path_renderer_service import GRAPH_BANNER

# Module-level logger
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_installed_handlers: List[logging.Handler] = []


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure logging to the console and, optionally, a file.

    Log records go to stderr so stdout carries only the planner's output.
    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Minimum level for the console handler.
        log_file: If given, also write DEBUG and above to this file.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(min(level, logging.DEBUG) if log_file else level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)


def build_parser(config: PlannerConfig) -> argparse.ArgumentParser:
    """Create the argument parser, with defaults taken from config."""
    csv_help = "\n".join(f"\t{line}" for line in CSV_EXAMPLE.splitlines())
    parser = argparse.ArgumentParser(
        prog="route-planner",
        description=(
            f"Find the cheapest route from city {config.origin_id} to a destination. "
            "Cost blends normalized ticket price and normalized distance."
        ),
        epilog=(
            "=============== Your CSV file should be in the following format "
            f"==================\n{csv_help}"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--filepath",
        default=config.records_path,
        help="Specify the filepath (default: %(default)s)",
    )
    parser.add_argument(
        "--to",
        type=int,
        default=config.destination_id,
        help="Specify the ID of the desired place to go (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Console log level (default: %(default)s)",
    )
    parser.add_argument("--log-file", help="Also write debug logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the planner.

    Args:
        argv: Command-line arguments, without the program name.

    Returns:
        Process exit status.
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = PlannerConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    parser = build_parser(config)

    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    setup_logging(logging.getLevelName(args.log_level), args.log_file)

    try:
        with PlanCheapestRoute(csv_path=args.filepath, config=config) as planner:
            graph_dump = planner.describe_graph()
            rendered = planner.search_and_render(args.to)
    except (FileNotFoundError, RoutePlannerError, SchemaError, SchemaErrors) as e:
        logger.critical("Route planning failed: %s", e)
        return 1

    print(GRAPH_BANNER)
    print(graph_dump)
    print(GRAPH_BANNER)
    print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
