import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

import httpx
import structlog

from gsltctrl.clients.game_servers_client import GameServersClient
from gsltctrl.clients.transport import WebApiTransport
from gsltctrl.config.logging import configure_logging
from gsltctrl.config.settings import load_settings
from gsltctrl.exceptions import GsltCtrlError
from gsltctrl.models.game_server import U32_MAX
from gsltctrl.services.token_service import TokenService

DESCRIPTION = """\
A tool to generate and renew Steam Game Server License Tokens (GSLT).

This tool will print out a valid token for the given appid and memo.
If a token already exists it returns that token.
If it was expired it gets renewed beforehand.
If no token for that appid and memo existed a new one is created.

appid and memo are given as CLI parameters.
The web API key is read from the environment variable GSLTCTRL_TOKEN.
This is done to prevent leaking the API key via the process listing."""

logger = structlog.get_logger("gsltctrl")


def package_version() -> str:
    try:
        return version("gsltctrl")
    except PackageNotFoundError:
        return "unknown"


def appid_type(value: str) -> int:
    try:
        appid = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid appid {value!r}: not an integer") from None
    if not 0 <= appid <= U32_MAX:
        raise argparse.ArgumentTypeError(f"invalid appid {value!r}: must be between 0 and {U32_MAX}")
    return appid


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsltctrl",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("appid", type=appid_type, help="the appid for which to create a token")
    parser.add_argument("memo", help="the memo string. Has to be unique per appid")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {package_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    parser.add_argument("--log-file", type=Path, help="additionally write a rotating debug log to this file")
    return parser


def run(appid: int, memo: str, http_transport: Optional[httpx.BaseTransport] = None) -> str:
    """Resolve a valid token for ``(appid, memo)`` using the configured API key."""
    settings = load_settings()
    with WebApiTransport.from_settings(settings, transport=http_transport) as transport:
        service = TokenService(GameServersClient(transport))
        return service.obtain_token(appid, memo)


def main(argv: Optional[List[str]] = None, http_transport: Optional[httpx.BaseTransport] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.verbose, log_file=args.log_file)

    try:
        token = run(args.appid, args.memo, http_transport=http_transport)
    except GsltCtrlError as e:
        logger.error(e.message, error_type=type(e).__name__, exit_code=e.exit_code)
        return e.exit_code

    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
