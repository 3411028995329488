"""Command line entry point for rpgstats."""

import argparse
import sys
from pathlib import Path

import structlog

from rpgstats.logging_config import configure_logging
from rpgstats.stats import (
    CHARACTER_CLASS_NAMES,
    STAT_NAMES,
    CharacterClass,
    ExperienceLedger,
    InvalidArgumentError,
    LevelUp,
    OutOfRangeError,
    ProgressionEngine,
    ProgressionLoadError,
    ProgressionTable,
    ProgressionValidationError,
    Stat,
    load_progression,
    validate_progression,
)

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="rpgstats", description="Inspect and exercise character progression content"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Load content and report problems")
    validate.add_argument("path", nargs="?", type=Path, help="Progression file or directory")

    curve = subparsers.add_parser("curve", help="Print one progression curve")
    curve.add_argument("character_class", choices=CHARACTER_CLASS_NAMES, help="Character class")
    curve.add_argument("stat", choices=STAT_NAMES, help="Stat")
    curve.add_argument("--path", type=Path, help="Progression file or directory")

    simulate = subparsers.add_parser("simulate", help="Feed experience gains into a character")
    simulate.add_argument(
        "character_class", choices=CHARACTER_CLASS_NAMES, help="Character class"
    )
    simulate.add_argument(
        "--xp",
        type=float,
        action="append",
        required=True,
        help="Experience to gain (repeatable)",
    )
    simulate.add_argument("--start-xp", type=float, default=0.0, help="Starting experience")
    simulate.add_argument("--path", type=Path, help="Progression file or directory")

    return parser


def cmd_validate(table: ProgressionTable) -> int:
    warnings = validate_progression(table)

    print(f"Loaded {len(table)} curves for {len(table.classes())} classes")
    for character_class in table.classes():
        stats = ", ".join(stat.value for stat in table.stats_for(character_class))
        print(f"  - {character_class.value}: {stats}")

    if warnings:
        print("Warnings:")
        for warning in warnings:
            print(f"  - {warning}")
    else:
        print("No problems found")

    return 0


def cmd_curve(table: ProgressionTable, character_class: CharacterClass, stat: Stat) -> int:
    if not table.has_curve(stat, character_class):
        print(f"No curve for {stat.value} / {character_class.value}", file=sys.stderr)
        return 1

    print(f"{stat.value} for {character_class.value}:")
    for level in range(1, table.get_levels(stat, character_class) + 1):
        print(f"  level {level:>3}: {table.get_stat(stat, character_class, level):g}")
    return 0


def cmd_simulate(
    table: ProgressionTable,
    character_class: CharacterClass,
    gains: list[float],
    start_xp: float,
) -> int:
    ledger = ExperienceLedger(start_xp, owner="simulated")
    engine = ProgressionEngine(table, character_class, ledger, name="simulated")

    def report_level_up(level_up: LevelUp) -> None:
        print(f"  LEVEL UP: {level_up.old_level} -> {level_up.new_level}")

    engine.on_level_up.subscribe(report_level_up)

    with engine.activated():
        print(f"start: xp={ledger.get_experience_points():g} level={engine.get_level()}")
        for amount in gains:
            ledger.add_experience(amount, source="simulate")
            print(
                f"+{amount:g}: xp={ledger.get_experience_points():g} "
                f"level={engine.get_level()} progress={engine.get_exp_progression():.2f}"
            )

    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        table = load_progression(args.path)
    except (ProgressionLoadError, ProgressionValidationError) as e:
        print(f"Failed to load progression: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "validate":
            return cmd_validate(table)
        if args.command == "curve":
            return cmd_curve(table, CharacterClass(args.character_class), Stat(args.stat))
        return cmd_simulate(table, CharacterClass(args.character_class), args.xp, args.start_xp)
    except OutOfRangeError as e:
        print(f"Progression content error: {e}", file=sys.stderr)
        return 1
    except InvalidArgumentError as e:
        print(f"Invalid argument: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    configure_logging()
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("interrupted_by_user")
        sys.exit(130)


if __name__ == "__main__":
    run()
