"""gh-dash entry point.

Commands:
    ghdash validate              check the token and print the login
    ghdash dashboard             print one snapshot as JSON (default)
    ghdash watch                 print a snapshot every poll interval
    ghdash set-token TOKEN       store the token in the config file
    ghdash set-interval MS       store the poll interval in the config file
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ghdash.config import AppConfig, default_config_path, load_config, save_poll_interval, save_token
from ghdash.dashboard import fetch_dashboard, validate_credential
from ghdash.errors import GhDashError
from ghdash.logging import GhDashLogging
from ghdash.models import DashboardSnapshot
from ghdash.poller import run_poll_loop

COMMANDS = ("validate", "dashboard", "watch", "set-token", "set-interval")

LOG = logging.getLogger("ghdash.main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI with optional command (dashboard by default)."""
    argv = argv if argv is not None else sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="ghdash",
        description="gh-dash - your open pull requests and review requests, with whose turn it is",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="dashboard",
        choices=COMMANDS,
        help="What to do (default: dashboard)",
    )
    parser.add_argument("value", nargs="?", help="Token for set-token, milliseconds for set-interval")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help=f"Path to YAML config file (default: {default_config_path()})",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent for printed snapshots")
    return parser.parse_args(argv)


def _print_snapshot(snapshot: DashboardSnapshot, indent: int) -> None:
    print(json.dumps(snapshot.to_payload(), indent=indent or None))
    sys.stdout.flush()


def _run_config_command(args: argparse.Namespace) -> int:
    if not args.value:
        print(f"error: {args.command} needs a value", file=sys.stderr)
        return 2
    if args.command == "set-token":
        save_token(args.value, args.config)
        print("Token saved")
        return 0
    try:
        config = save_poll_interval(int(args.value), args.config)
    except (ValueError, ValidationError) as e:
        print(f"error: invalid poll interval {args.value!r}: {e}", file=sys.stderr)
        return 2
    print(f"Poll interval set to {config.dashboard.poll_interval_ms} ms")
    return 0


async def _run(args: argparse.Namespace, config: AppConfig, token: str) -> None:
    api_url = config.github.api_url
    timeout = config.github.timeout_seconds
    if args.command == "validate":
        user = await validate_credential(token, api_url=api_url, timeout=timeout)
        print(f"Token OK: {user.login}")
    elif args.command == "watch":
        await run_poll_loop(config, token, on_snapshot=lambda s: _print_snapshot(s, args.indent))
    else:
        snapshot = await fetch_dashboard(token, api_url=api_url, timeout=timeout)
        _print_snapshot(snapshot, args.indent)


def main(argv: list[str] | None = None) -> int:
    """Entry point: dispatch to the selected command."""
    args = parse_args(argv)

    if args.command in ("set-token", "set-interval"):
        return _run_config_command(args)

    config = load_config(args.config)
    GhDashLogging(config.logging).setup()

    if args.check:
        print("Config OK:", config.github.api_url, f"poll={config.dashboard.poll_interval_ms}ms")
        return 0

    token = config.github_token_resolved
    if not token:
        LOG.error("No GitHub token configured (run 'ghdash set-token' or set GITHUB_TOKEN)")
        return 1

    try:
        asyncio.run(_run(args, config, token))
    except KeyboardInterrupt:
        return 0
    except GhDashError as e:
        LOG.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
