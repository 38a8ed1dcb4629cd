"""Entry point for the scrimmage package."""

import argparse
import sys

from rich.console import Console
from rich.table import Table

from scrimmage.config import configure_logging, get_config, make_rng
from scrimmage.core.enums import DefensivePlay, PassPlay, RunPlay
from scrimmage.core.models.game import GameState, Side
from scrimmage.core.models.play import PlayCall
from scrimmage.core.models.player import Roster


def parse_call(text: str) -> PlayCall:
    """
    Parse a call like "run:inside", "pass:deep", "field_goal" or "punt".

    Raises:
        ValueError: If the call is not recognised
    """
    category, _, subtype = text.lower().partition(":")
    try:
        if category == "run":
            return PlayCall.run(RunPlay[subtype.upper()])
        if category == "pass":
            return PlayCall.pass_play(PassPlay[subtype.upper()])
    except KeyError:
        raise ValueError(f"Unknown {category} play: {subtype!r}") from None
    if category == "field_goal":
        return PlayCall.field_goal()
    if category == "punt":
        return PlayCall.punt()
    raise ValueError(f"Unknown play call: {text!r}")


def parse_defense(text: str) -> DefensivePlay:
    """Parse a defensive scheme name such as "blitz" or "stack_the_box"."""
    try:
        return DefensivePlay[text.upper()]
    except KeyError:
        raise ValueError(f"Unknown defensive call: {text!r}") from None


def run_calibrate(args: argparse.Namespace, console: Console) -> None:
    from scrimmage.simulation.calibration import run_calibration

    state = GameState.kickoff().replace(
        down=args.down, yards_to_go=args.distance, field_position=args.field_position,
    )
    summary = run_calibration(
        parse_call(args.call),
        parse_defense(args.defense),
        offense=Roster.uniform("Offense", args.offense_rating),
        defense=Roster.uniform("Defense", args.defense_rating),
        state=state,
        plays=args.plays,
        seed=args.seed,
        workers=args.workers,
    )
    table = Table(title=summary.label)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for label, value in summary.as_rows():
        table.add_row(label, value)
    console.print(table)


def run_snaps(args: argparse.Namespace, console: Console) -> None:
    from scrimmage.events import EventBus
    from scrimmage.logging import PlayLog
    from scrimmage.simulation.engine import SimulationEngine

    bus = EventBus()
    log = PlayLog()
    log.connect_to_event_bus(bus)
    engine = SimulationEngine(event_bus=bus)
    rng = make_rng(args.seed)

    home = Roster.uniform("Home", args.offense_rating)
    away = Roster.uniform("Away", args.defense_rating)
    calls = [PlayCall.run(p) for p in RunPlay] + [
        PlayCall.pass_play(p) for p in PassPlay if p != PassPlay.HAIL_MARY
    ]

    state = GameState.kickoff()
    for _ in range(args.snaps):
        if not state.in_progress:
            break
        offense, defense = (home, away) if state.possession is Side.HOME else (away, home)
        if state.down == 4:
            call = PlayCall.field_goal() if state.distance_to_goal <= 35 else PlayCall.punt()
        else:
            call = rng.choice(calls)
        report = engine.run_play(state, call, rng.choice(list(DefensivePlay)), offense, defense, rng)
        state = report.state_after

    table = Table(title="Play by play")
    for column in ("Qtr", "Clock", "Situation", "Play", "Away", "Home"):
        table.add_column(column)
    for entry in log.entries:
        situation = (
            f"{entry.offense.name.title()} {entry.down}&{entry.yards_to_go} {entry.field_position}"
            if entry.event_type == "PLAY" else entry.event_type
        )
        table.add_row(str(entry.quarter), entry.time_remaining, situation, entry.description,
                      str(entry.away_score), str(entry.home_score))
    console.print(table)
    console.print(state.display)


def main() -> None:
    """Main entry point for the scrimmage command line."""
    parser = argparse.ArgumentParser(
        description="Scrimmage - American football play outcome simulator",
        prog="scrimmage",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: SCRIMMAGE_SEED)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: SCRIMMAGE_LOG_LEVEL)")
    parser.add_argument("--offense-rating", type=int, default=50, help="Rating for every offensive (snaps: home) player")
    parser.add_argument("--defense-rating", type=int, default=50, help="Rating for every defensive (snaps: away) player")
    commands = parser.add_subparsers(dest="command", required=True)

    calibrate = commands.add_parser("calibrate", help="Run one call many times and summarize it")
    calibrate.add_argument("call", help='Offensive call, e.g. "run:inside", "pass:deep", "field_goal"')
    calibrate.add_argument("--defense", default="balanced", help="Defensive call (default: balanced)")
    calibrate.add_argument("--plays", type=int, default=10_000, help="Number of snaps (default: 10000)")
    calibrate.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    calibrate.add_argument("--down", type=int, default=1)
    calibrate.add_argument("--distance", type=int, default=10)
    calibrate.add_argument("--field-position", type=int, default=25, help="0 = own goal line, 100 = opponent's")

    snaps = commands.add_parser("snaps", help="Run random calls from kickoff and print the play log")
    snaps.add_argument("--snaps", type=int, default=40, help="Number of snaps (default: 40)")

    args = parser.parse_args()
    configure_logging(args.log_level)
    console = Console()

    errors = get_config().validate()
    if errors:
        for error in errors:
            console.print(f"[red]config error:[/red] {error}")
        sys.exit(2)

    try:
        if args.command == "calibrate":
            run_calibrate(args, console)
        else:
            run_snaps(args, console)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
