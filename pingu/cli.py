# Copyright 2025 icecake0141
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review for correctness and security.

"""
Command-line interface for pingu.

This module contains the main entry point: argument handling, pinger
construction, interrupt handling and wiring of the output callbacks.
"""

import argparse
import enum
import functools
import logging
import logging.handlers
import os
import signal
import sys
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from pingu import __revision__, __version__
from pingu.config import load_config
from pingu.ping_wrapper import MAX_PAYLOAD_SIZE
from pingu.pinger import Pinger, PingerError
from pingu.ui_render import format_banner, print_packet, print_summary, should_use_color

logger = logging.getLogger(__name__)

APP_NAME = "pingu"
APP_USAGE = "%(prog)s [OPTIONS] HOST"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ExitCode(enum.IntEnum):
    """Process exit status."""

    OK = 0
    ERR_ARGS = 1
    ERR_PING = 2


class ArgumentError(Exception):
    """Raised for bad, missing or excess command-line arguments."""


class InitializationError(Exception):
    """Raised when the pinger cannot be constructed."""


class RunError(Exception):
    """Raised when the ping loop fails."""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ArgumentError instead of exiting."""

    def error(self, message: str):  # type: ignore[override]
        raise ArgumentError(f"parse error: {message}")


def _replay_records(records: Sequence[logging.LogRecord]) -> None:
    """Emit records held back while logging was not yet configured."""
    for record in records:
        record_logger = logging.getLogger(record.name)
        if record_logger.isEnabledFor(record.levelno):
            record_logger.handle(record)


def _configure_logging(log_level: str, log_file: Optional[str]) -> None:
    """Configure logging handlers for CLI execution."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.insert(0, logging.FileHandler(os.path.expanduser(log_file), encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


# Hardcoded defaults for config-overridable fields.
# Applied after config merging for any field still set to None.
_HARDCODED_DEFAULTS: Dict[str, Any] = {
    "count": 0,
    "interval": 1.0,
    "timeout": 1.0,
    "size": 56,
    "ttl": 64,
    "color": True,
    "log_level": "WARNING",
}


def _apply_config_to_args(args: argparse.Namespace, config: Dict[str, Any]) -> None:
    """
    Overlay config file values onto a parsed argument namespace.

    Only fields that are still ``None`` (i.e. not explicitly set on the CLI)
    are updated.

    Args:
        args: Namespace returned by ``argparse.ArgumentParser.parse_args()``.
        config: Dictionary of values loaded from the config file.
    """
    for key, value in config.items():
        if hasattr(args, key) and getattr(args, key) is None:
            setattr(args, key, value)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = _ArgumentParser(
        prog=APP_NAME,
        usage=APP_USAGE,
        description="pingu - ping a host and watch a penguin appear, one reply at a time",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="store_true",
        help="Show version",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=int,
        default=None,
        help="Stop after sending this many echo requests (default: 0 for infinite)",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=None,
        help="Interval in seconds between echo requests (default: 1.0, range: 0.1-60.0)",
    )
    parser.add_argument(
        "-W",
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each reply (default: 1.0)",
    )
    parser.add_argument(
        "-s",
        "--size",
        type=int,
        default=None,
        help="Payload size in bytes (default: 56)",
    )
    parser.add_argument(
        "-t",
        "--ttl",
        type=int,
        default=None,
        help="IP time to live (default: 64)",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable colored output",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=LOG_LEVELS,
        help="Logging level for diagnostic output on stderr (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path for persistent logging",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        default=False,
        help="Skip loading ~/.pingu.conf config file",
    )
    parser.add_argument("hosts", nargs="*", metavar="HOST", help="Host to ping (IP address or hostname)")
    return parser


def handle_options(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command-line arguments.

    Raises:
        ArgumentError: On parse failure, a missing host or more than one host.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        return args

    if len(args.hosts) > 1:
        raise ArgumentError("too many arguments")
    if not args.hosts:
        raise ArgumentError("no host specified")
    args.host = args.hosts[0]

    # Load and apply config file unless --no-config was given
    if not args.no_config:
        try:
            config = load_config()
        except ValueError as exc:
            raise ArgumentError(f"config error: {exc}") from exc
        _apply_config_to_args(args, config)

    # Apply hardcoded defaults for any config-overridable field still at None
    for field, default in _HARDCODED_DEFAULTS.items():
        if getattr(args, field, None) is None:
            setattr(args, field, default)

    if args.count < 0:
        parser.error("--count must be a non-negative number (0 for infinite).")
    if not 0.1 <= args.interval <= 60.0:
        parser.error("--interval must be between 0.1 and 60.0 seconds.")
    if args.timeout <= 0:
        parser.error("--timeout must be a positive number of seconds.")
    if not 0 <= args.size <= MAX_PAYLOAD_SIZE:
        parser.error(f"--size must be between 0 and {MAX_PAYLOAD_SIZE}.")
    if not 1 <= args.ttl <= 255:
        parser.error("--ttl must be between 1 and 255.")
    args.log_level = str(args.log_level).upper()
    if args.log_level not in LOG_LEVELS:
        parser.error(f"--log-level must be one of {', '.join(LOG_LEVELS)}.")
    return args


@contextmanager
def stop_on_interrupt(pinger: Pinger) -> Iterator[None]:
    """
    Stop the pinger on every SIGINT while the context is active.

    The previous handler is restored on exit, so interrupts after the run
    no longer reach the pinger.
    """

    def _handler(signum, frame):  # pylint: disable=unused-argument
        logger.debug("Interrupt received, stopping ping to %s", pinger.addr)
        pinger.stop()

    try:
        previous = signal.signal(signal.SIGINT, _handler)
    except ValueError:
        # signal handlers can only be installed from the main thread
        logger.debug("Cannot install SIGINT handler outside the main thread")
        yield
        return

    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)


def init_pinger(args: argparse.Namespace, use_color: bool) -> Pinger:
    """
    Construct the pinger, register the output callbacks and print the banner.

    Raises:
        InitializationError: If the host cannot be resolved.
    """
    try:
        pinger = Pinger(
            args.host,
            count=args.count,
            interval=args.interval,
            timeout=args.timeout,
            size=args.size,
            ttl=args.ttl,
        )
    except PingerError as exc:
        raise InitializationError(f"failed to init pinger: {exc}") from exc

    pinger.on_recv = functools.partial(print_packet, use_color=use_color)
    pinger.on_finish = functools.partial(print_summary, use_color=use_color)

    print(format_banner(pinger.addr, pinger.ip_addr), flush=True)
    return pinger


def run(argv: Optional[Sequence[str]] = None) -> Tuple[ExitCode, Optional[Exception]]:
    """
    Run pingu with the given arguments.

    Returns:
        The exit code and the error to report, if any.
    """
    # Config warnings are raised before logging is configured; hold them until then.
    pending = logging.handlers.BufferingHandler(capacity=1000)
    config_logger = logging.getLogger("pingu.config")
    config_logger.addHandler(pending)
    try:
        args = handle_options(argv)
    except ArgumentError as exc:
        return ExitCode.ERR_ARGS, exc
    finally:
        config_logger.removeHandler(pending)

    if args.version:
        print(f"{APP_NAME}: v{__version__}-rev{__revision__}")
        return ExitCode.OK, None

    try:
        _configure_logging(args.log_level, args.log_file)
    except OSError as exc:
        return ExitCode.ERR_ARGS, ArgumentError(f"cannot open log file: {exc}")
    _replay_records(pending.buffer)

    use_color = should_use_color(sys.stdout, args.color)

    try:
        pinger = init_pinger(args, use_color)
    except InitializationError as exc:
        # Construction failures keep exit status 0; only run failures exit 2.
        return ExitCode.OK, exc

    try:
        with stop_on_interrupt(pinger):
            pinger.run()
    except PingerError as exc:
        return ExitCode.ERR_PING, RunError(f"an error occurred when running ping: {exc}")

    return ExitCode.OK, None


def main() -> None:
    """Main entrypoint for the CLI - runs the application and exits with its status."""
    try:
        code, err = run(sys.argv[1:])
    except KeyboardInterrupt:
        # Interrupted before the ping loop installed its own SIGINT handler.
        sys.exit(int(ExitCode.OK))
    if err is not None:
        print(f"[ERROR] {err}", file=sys.stderr)
    sys.exit(int(code))
