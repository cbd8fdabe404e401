from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, TextIO

import structlog

from .applier import adjust
from .config import ConfigManager, TimeAdjustConfig
from .logging import configure_logging
from .parser import explain, format_adjustment, parse
from .timeutils import format_moment, parse_moment, resolve_timezone

log = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeadjust",
        description="Apply compact time adjustments such as '+1d30m' or '@20d' to a moment.",
    )
    parser.add_argument(
        "expression",
        nargs="?",
        help="Adjustment expression, e.g. '+1d -1h' or -2m",
    )
    parser.add_argument(
        "--from",
        dest="base",
        default="now",
        help="Base moment: 'now', 'today' or ISO 8601 (default: now)",
    )
    parser.add_argument("--preset", help="Use a named expression from the config file")
    parser.add_argument("--format", dest="output_format", help="'iso' or a strftime pattern")
    parser.add_argument("--explain", action="store_true", help="Show parsed adjustments instead")
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--tui", action="store_true", help="Open the interactive previewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-json", action="store_true", help="Log JSON lines to stderr")
    return parser


def _is_decrement(value: str) -> bool:
    return value.startswith("-") and not value.startswith("--")


def _resolve_expression(args: argparse.Namespace, config: TimeAdjustConfig) -> str | None:
    if args.preset:
        return config.preset(args.preset)
    return args.expression


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None, stderr: TextIO | None = None) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    parser = build_parser()
    args, extras = parser.parse_known_args(argv)
    # argparse reads a lone decrement such as "-2m" as an unknown option
    if extras:
        if args.expression is None and len(extras) == 1 and _is_decrement(extras[0]):
            args.expression = extras[0]
        else:
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
    configure_logging(verbose=args.verbose, log_json=args.log_json)

    manager = ConfigManager(args.config)
    config = manager.load()
    for issue in manager.errors():
        log.warning("config_issue", issue=issue, path=str(manager.config_path))

    if args.tui:
        from .tui.app import TimeAdjustApp

        TimeAdjustApp(config=config).run()
        return EXIT_OK

    try:
        expression = _resolve_expression(args, config)
    except KeyError as exc:
        print(exc.args[0], file=err)
        return EXIT_INVALID
    if expression is None:
        parser.print_usage(err)
        print("timeadjust: error: an expression or --preset is required", file=err)
        return EXIT_INVALID

    adjustments = parse(expression)
    if adjustments is None:
        for issue in explain(expression):
            print(issue, file=err)
        return EXIT_INVALID

    if args.explain:
        for adjustment in adjustments:
            fields = ", ".join(f"{unit.value}={amount}" for unit, amount in adjustment.values.items())
            print(f"{format_adjustment(adjustment)}\t{adjustment.type.name.lower()}\t{fields}", file=out)
        return EXIT_OK

    try:
        tz = resolve_timezone(config.display.timezone)
        base = parse_moment(args.base, tz=tz)
    except ValueError as exc:
        print(str(exc), file=err)
        return EXIT_INVALID

    result = adjust(base, adjustments)
    log.debug("adjusted", base=base.isoformat(), expression=expression, result=result.isoformat())
    print(format_moment(result, args.output_format or config.display.output_format), file=out)
    return EXIT_OK
