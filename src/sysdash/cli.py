"""Command line entry point for sysdash."""

from __future__ import annotations

import argparse
import dataclasses
import sys

from .commands.serve import cmd_serve
from .commands.snapshot import cmd_snapshot
from .config import Settings, parse_duration
from .logging import configure_logging


def _duration(raw: str) -> float:
    try:
        return parse_duration(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def cmd_version(args: argparse.Namespace, settings: Settings) -> int:
    """Show version."""
    from . import __version__

    sys.stdout.write(f"sysdash version {__version__}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysdash",
        description="Periodic system metrics sampler with a JSON read API",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL env var or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # serve command
    p_serve = subparsers.add_parser(
        "serve",
        help="Sample continuously and serve the read API",
    )
    p_serve.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port to listen on (default: SYSDASH_PORT or 8081)",
    )
    p_serve.add_argument(
        "--host",
        default=None,
        help="Address to bind (default: SYSDASH_HOST or all interfaces)",
    )
    p_serve.add_argument(
        "--out-dir",
        default=None,
        help="Directory for the persisted snapshot (default: SYSDASH_OUTDIR or /var/lib/sysdash)",
    )
    p_serve.add_argument(
        "--out-file",
        default=None,
        help="Persisted snapshot file name (default: SYSDASH_OUTFILE or metrics.json)",
    )
    p_serve.add_argument(
        "--interval",
        "-i",
        type=_duration,
        default=None,
        help="Sampling interval, e.g. 2s or 500ms (default: SYSDASH_INTERVAL or 2s)",
    )
    p_serve.set_defaults(func=cmd_serve)

    # snapshot command
    p_snapshot = subparsers.add_parser(
        "snapshot",
        help="Print a single snapshot as JSON",
    )
    p_snapshot.add_argument(
        "--sample",
        "-s",
        type=_duration,
        default=0.5,
        help="Time between the two CPU readings (default: 0.5s)",
    )
    p_snapshot.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any probe failed",
    )
    p_snapshot.set_defaults(func=cmd_snapshot)

    # version command
    p_version = subparsers.add_parser(
        "version",
        help="Show version",
    )
    p_version.set_defaults(func=cmd_version)

    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Environment-derived settings with any explicit flags applied on top."""
    overrides = {
        "port": getattr(args, "port", None),
        "host": getattr(args, "host", None),
        "out_dir": getattr(args, "out_dir", None),
        "out_file": getattr(args, "out_file", None),
        "interval_seconds": getattr(args, "interval", None),
    }
    return dataclasses.replace(Settings(), **{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    settings = settings_from_args(args)
    if settings.history_size < 1:
        sys.stderr.write("Error: SYSDASH_HISTORY must be >= 1\n")
        raise SystemExit(2)

    rc = int(args.func(args, settings))
    raise SystemExit(rc)
