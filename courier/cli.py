from __future__ import annotations

import argparse
import logging
import shutil
import sys
from collections.abc import Sequence

from .app import CourierApp
from .config import DEFAULT_METHOD, DEFAULT_URL, MIN_TERMINAL_HEIGHT, MIN_TERMINAL_WIDTH
from .errors import TerminalEnvironmentError, ValidationError
from .logging_setup import configure_logging
from .models import HttpMethod, RequestSpec
from .parsing import parse_pair

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Courier: a tabbed HTTP client for the terminal.")
    parser.add_argument("url", nargs="?", default=DEFAULT_URL, help="URL for the first tab.")
    parser.add_argument(
        "-X",
        "--method",
        type=str.upper,
        choices=[m.value for m in HttpMethod],
        default=DEFAULT_METHOD.value,
        help="HTTP method for the first tab.",
    )
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="KEY: VALUE",
        help="Header for the first tab (repeatable).",
    )
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter for the first tab (repeatable).",
    )
    parser.add_argument("-d", "--data", default=None, help="Request body for the first tab.")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Do not verify TLS certificates.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to courier.log in the current directory.",
    )
    return parser.parse_args(argv)


def build_initial_spec(args: argparse.Namespace) -> RequestSpec:
    return RequestSpec(
        url=args.url,
        method=HttpMethod(args.method),
        headers=[parse_pair(raw, ":") for raw in args.header],
        params=[parse_pair(raw, "=") for raw in args.param],
        body=args.data or None,
    )


def check_terminal_size(size: tuple[int, int] | None = None) -> None:
    width, height = size if size is not None else shutil.get_terminal_size()
    if width < MIN_TERMINAL_WIDTH:
        raise TerminalEnvironmentError(f"Terminal width too small: {width} (minimum: {MIN_TERMINAL_WIDTH})")
    if height < MIN_TERMINAL_HEIGHT:
        raise TerminalEnvironmentError(f"Terminal height too small: {height} (minimum: {MIN_TERMINAL_HEIGHT})")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    log_path = configure_logging(args.debug)
    if args.debug and log_path is None:
        print("Debug logging requested but log file could not be created.", file=sys.stderr)

    try:
        spec = build_initial_spec(args)
    except ValidationError as exc:
        print(f"Invalid argument: {exc}", file=sys.stderr)
        return 2

    try:
        check_terminal_size()
    except TerminalEnvironmentError as exc:
        logger.debug("Startup aborted: %s", exc)
        print(f"Failed to initialize terminal: {exc}", file=sys.stderr)
        return 1

    app = CourierApp(spec, verify_tls=not args.insecure)
    try:
        result = app.run()
    except Exception as exc:  # pragma: no cover - depends on the host terminal
        logger.exception("Terminal host failed")
        print(f"Failed to initialize terminal: {exc}", file=sys.stderr)
        return 1
    return result or 0
