"""Command-line interface for Copa Vallejo.

Works on a JSON store file: generates phase schedules, prints standings,
stores qualifiers and dry-runs the player regulation check.
"""

# Copa Vallejo
# Copyright (C) 2025  Copa Vallejo developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from dateutil import parser as date_parser

from copavallejo import __version__
from copavallejo.constants import TIEBREAK_NAMES
from copavallejo.controllers.roster import PlayerRegistry
from copavallejo.controllers.tournament import ScheduleGenerator, StandingsCalculator
from copavallejo.exceptions import CopaVallejoException
from copavallejo.models import StandingsRow
from copavallejo.repositories import JsonStore
from copavallejo.utils import set_log_level, setup_logger

logger = setup_logger(__name__)

TABLE_HEADER = ("Pos", "Team", "P", "W", "D", "L", "GF", "GA", "GD", "Pts")


def parse_day(value: str) -> date:
    """Parse an ISO date for ``--as-of``.

    Raises:
        argparse.ArgumentTypeError: If the value is not a date
    """
    try:
        return date_parser.isoparse(value).date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'. Use YYYY-MM-DD")


def format_table(rows: List[StandingsRow], store: JsonStore) -> str:
    """Render standings rows as a fixed-width text table."""
    lines = []
    body = []
    for row in rows:
        team = store.teams.get(row.team_id)
        body.append(
            (
                str(row.position),
                team.name if team else row.team_id,
                str(row.played),
                str(row.won),
                str(row.drawn),
                str(row.lost),
                str(row.goals_for),
                str(row.goals_against),
                f"{row.goal_difference:+d}",
                str(row.points),
            )
        )
    widths = [
        max(len(cells[i]) for cells in [TABLE_HEADER, *body])
        for i in range(len(TABLE_HEADER))
    ]
    for cells in [TABLE_HEADER, *body]:
        lines.append(
            "  ".join(
                cell.ljust(w) if i == 1 else cell.rjust(w)
                for i, (cell, w) in enumerate(zip(cells, widths))
            )
        )
    return "\n".join(lines)


def _team_name(store: JsonStore, team_id: str) -> str:
    team = store.teams.get(team_id)
    return team.name if team else team_id


def cmd_generate(args: argparse.Namespace, store: JsonStore) -> int:
    generator = ScheduleGenerator(store.phases, store.matches)
    matches = generator.generate(args.phase_id)
    store.save()
    for match in matches:
        group = f" [{match.group}]" if match.group else ""
        print(
            f"Matchday {match.matchday}{group}: "
            f"{_team_name(store, match.home_team_id)} vs "
            f"{_team_name(store, match.away_team_id)}"
        )
    print(f"{len(matches)} match(es) generated")
    return 0


def cmd_standings(args: argparse.Namespace, store: JsonStore) -> int:
    calculator = StandingsCalculator(store.phases, store.matches)
    if args.groups:
        for letter, rows in calculator.group_tables(args.phase_id).items():
            print(f"Group {letter}")
            print(format_table(rows, store))
            print()
    else:
        print(format_table(calculator.calculate(args.phase_id), store))
    config = store.phases.require(args.phase_id).config
    print(
        "Ranked by: "
        + " > ".join(TIEBREAK_NAMES[c.value] for c in config.tiebreak_order)
    )
    return 0


def cmd_qualifiers(args: argparse.Namespace, store: JsonStore) -> int:
    calculator = StandingsCalculator(store.phases, store.matches)
    if args.per_group is not None:
        qualified = calculator.get_group_qualifiers(args.phase_id, args.per_group)
    else:
        qualified = calculator.get_qualifiers(args.phase_id, args.count)
    store.save()
    for position, team_id in enumerate(qualified, start=1):
        print(f"{position}. {_team_name(store, team_id)}")
    return 0


def cmd_regulation(args: argparse.Namespace, store: JsonStore) -> int:
    registry = PlayerRegistry(store.teams, store.players, store.regulation)
    player = store.players.require(args.player_id)
    report = registry.check_regulation(args.player_id, args.as_of)
    if report.valid:
        print(f"{player.full_name}: eligible")
        return 0
    print(f"{player.full_name}: not eligible")
    for error in report.errors:
        print(f"  - {error}")
    return 2


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="copavallejo",
        description="Copa Vallejo tournament tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build the fixtures of a phase
  copavallejo --store copa.json generate phase-1234

  # Print one table per group
  copavallejo --store copa.json standings phase-1234 --groups

  # Store the two best teams of every group
  copavallejo --store copa.json qualifiers phase-1234 --per-group 2

  # Check whether a player can be approved
  copavallejo --store copa.json regulation player-5678 --as-of 2025-03-01
        """,
    )
    parser.add_argument(
        "--store", required=True, help="Path to the JSON store file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate a phase schedule")
    generate.add_argument("phase_id")
    generate.set_defaults(handler=cmd_generate)

    standings = commands.add_parser("standings", help="Print a phase table")
    standings.add_argument("phase_id")
    standings.add_argument(
        "--groups", action="store_true", help="One table per group"
    )
    standings.set_defaults(handler=cmd_standings)

    qualifiers = commands.add_parser(
        "qualifiers", help="Store and print the teams that qualify"
    )
    qualifiers.add_argument("phase_id")
    qualifiers.add_argument(
        "count", type=int, nargs="?", default=0, help="Top teams of the table"
    )
    qualifiers.add_argument(
        "--per-group", type=int, help="Top teams of every group instead"
    )
    qualifiers.set_defaults(handler=cmd_qualifiers)

    regulation = commands.add_parser(
        "regulation", help="Check a player against the regulation"
    )
    regulation.add_argument("player_id")
    regulation.add_argument(
        "--as-of", type=parse_day, help="Day the age is computed on (default: today)"
    )
    regulation.set_defaults(handler=cmd_regulation)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        store = JsonStore.open(args.store)
        return args.handler(args, store)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except CopaVallejoException as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"{args.command} failed unexpectedly: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
