#!/usr/bin/env python3
"""
irail-status — Belgian railway stations and connections in the terminal

Uses the iRail API (https://api.irail.be).

Usage:
    irail-status stations                          # List every station
    irail-status stations --lang nl --sort id      # Dutch names, sorted by ID
    irail-status connections                       # Prompt for everything
    irail-status connections --from Gent-Sint-Pieters --to Brugge
    irail-status connections --from Gent-Sint-Pieters --to Brugge --yes
"""

import argparse
import logging
import sys
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler

from .api import StationCache, get_stations
from .config import Config, DEFAULT_LANGUAGE, LANGUAGES
from .display import (
    CONNECTIONS_VIEW, STATIONS_VIEW, build_error_panel, build_no_connections_panel,
    build_view_table,
)
from .errors import IrailError, ValidationError
from .models import TIMESEL_CHOICES, TRANSPORT_TYPES, Query
from .prompts import rich_ask, parse_time_of_day, read_choice, read_date, read_time

logger = logging.getLogger(__name__)


def _accept_default(label, default=None, choices=None):
    """Stand-in for a prompt that takes the offered default without asking."""
    return default


def _sortable_keys(view) -> list[str]:
    return [column.key for column in view.columns if column.sortable]


def build_query(args: argparse.Namespace, config: Config, cache: StationCache, ask=rich_ask) -> Query:
    """Fill in every query value the command line left out, prompting as needed."""
    if args.yes:
        from_station, to_station = config.station_from, config.station_to
    else:
        names = sorted({station["name"] for station in get_stations(cache, True, config.language)})
        from_station = read_choice("From", names, default=config.station_from, ask=ask)
        to_station = read_choice("To", names, default=config.station_to, ask=ask)

    timesel = args.timesel or read_choice("Time refers to", TIMESEL_CHOICES, default="departure", ask=ask)
    date = args.date or read_date(ask=ask)
    time = args.time or read_time(ask=ask)

    return Query(
        from_station=from_station,
        to_station=to_station,
        timesel=timesel,
        type_of_transport=args.type,
        date=date,
        time=time,
    )


def run_stations(console: Console, cache: StationCache, config: Config, args: argparse.Namespace) -> None:
    entries = STATIONS_VIEW.entries(cache, config.language)
    console.print(build_view_table(STATIONS_VIEW, entries, args.sort, args.reverse, subtitle=config.language))


def run_connections(console: Console, cache: StationCache, config: Config, args: argparse.Namespace) -> None:
    ask = _accept_default if args.yes else rich_ask
    query = build_query(args, config, cache, ask=ask)
    logger.debug("Querying %s", query)

    entries = CONNECTIONS_VIEW.entries(query)
    if not entries:
        console.print(build_no_connections_panel(query.from_station, query.to_station))
        return

    subtitle = f"{query.from_station} → {query.to_station}, {query.timesel} {query.date} {query.time}"
    console.print(build_view_table(CONNECTIONS_VIEW, entries, args.sort, args.reverse, subtitle=subtitle))


def _date_arg(value: str) -> str:
    try:
        datetime.strptime(value, "%d%m%y")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected DDMMYY, got {value!r}")
    return value


def _time_arg(value: str) -> str:
    try:
        return parse_time_of_day(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log requests and cache activity"
    )
    common.add_argument(
        "--lang",
        choices=LANGUAGES,
        default=DEFAULT_LANGUAGE,
        help=f"Language for station names (default: {DEFAULT_LANGUAGE})"
    )
    common.add_argument(
        "--reverse",
        action="store_true",
        help="Reverse the sort order"
    )

    parser = argparse.ArgumentParser(
        prog="irail-status",
        description="Look up Belgian railway stations and connections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s stations                              # All stations, by name
    %(prog)s stations --lang fr                    # French station names
    %(prog)s connections                           # Prompt for the journey
    %(prog)s connections --from Leuven --to Namur  # Pre-fill the stations
    %(prog)s connections --from Leuven --to Namur --yes --time 8:30

Missing connection details are asked for interactively. Dates are offered
for the next 31 days; times are entered as HH:MM.
        """
    )

    commands = parser.add_subparsers(dest="command", required=True)

    stations = commands.add_parser("stations", parents=[common], help="List every station")
    stations.add_argument(
        "--sort",
        choices=_sortable_keys(STATIONS_VIEW),
        help=f"Column to sort by (default: {STATIONS_VIEW.sort_key})"
    )

    connections = commands.add_parser("connections", parents=[common], help="Find connections between two stations")
    connections.add_argument(
        "--from",
        dest="from_station",
        metavar="NAME",
        help="Departure station, offered as the prompt default"
    )
    connections.add_argument(
        "--to",
        dest="to_station",
        metavar="NAME",
        help="Destination station, offered as the prompt default"
    )
    connections.add_argument(
        "--timesel",
        choices=TIMESEL_CHOICES,
        help="Whether the time is a departure or an arrival time"
    )
    connections.add_argument(
        "--type",
        choices=TRANSPORT_TYPES,
        default="all",
        help="Type of transport (default: all)"
    )
    connections.add_argument(
        "--date",
        type=_date_arg,
        metavar="DDMMYY",
        help="Travel date"
    )
    connections.add_argument(
        "--time",
        type=_time_arg,
        metavar="HH:MM",
        help="Travel time"
    )
    connections.add_argument(
        "--sort",
        choices=_sortable_keys(CONNECTIONS_VIEW),
        help=f"Column to sort by (default: {CONNECTIONS_VIEW.sort_key})"
    )
    connections.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Accept defaults instead of prompting (needs --from and --to)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "yes", False) and not (args.from_station and args.to_station):
        parser.error("--yes needs both --from and --to")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    config = Config(
        language=args.lang,
        station_from=getattr(args, "from_station", None),
        station_to=getattr(args, "to_station", None),
    )
    console = Console()
    cache = StationCache()

    try:
        if args.command == "stations":
            run_stations(console, cache, config, args)
        else:
            run_connections(console, cache, config, args)
    except IrailError as e:
        logger.debug("Command failed", exc_info=True)
        console.print(build_error_panel(str(e)))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[dim]Cancelled.[/]")
        sys.exit(130)


if __name__ == "__main__":
    main()
