"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hello_cli start [--port N] [--log-level LEVEL]
    python -m hello_cli dev [--port N] [--log-level LEVEL] [--reload-dir DIR ...]

Environment Variables:
    PORT                    Listening port (default: 5000)
    HELLO_LOG_LEVEL         Log level (default: INFO)
    HELLO_MAX_BODY_BYTES    Request body size limit in bytes (default: 102400)
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from typing import Sequence

from hello_cli import __version__
from hello_cli.commands import start, dev
from core.config.runtime import LOG_LEVELS, ServerConfig


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def port_number(value: str) -> int:
    """argparse type for a TCP port."""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def _add_server_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--port", "-p",
        type=port_number,
        default=None,
        help="Listening port (overrides PORT)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=list(LOG_LEVELS),
        help="Log level (overrides HELLO_LOG_LEVEL)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on error",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hello-api",
        description="Hello JSON API - run the server in production or development mode.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- start command ---
    start_parser = subparsers.add_parser(
        "start",
        help="Start the server",
        description="Bind 127.0.0.1 on PORT (default 5000) and serve until interrupted.",
    )
    _add_server_arguments(start_parser)
    start_parser.set_defaults(func=start.start_cmd)

    # --- dev command ---
    dev_parser = subparsers.add_parser(
        "dev",
        help="Start the server and restart it when source files change",
        description="Run the server under uvicorn's file-watching reloader.",
    )
    _add_server_arguments(dev_parser)
    dev_parser.add_argument(
        "--reload-dir",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory to watch (repeatable, default: current directory)",
    )
    dev_parser.set_defaults(func=dev.dev_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Resolve configuration once, before anything binds
    config = ServerConfig.from_env()
    setup_logging(level=args.log_level or config.log_level)
    args.server_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
