import argparse
import logging
import sys
from pathlib import Path

import uvicorn

from src.api.deps import Settings
from src.api.main import create_app, create_fallback_app
from src.app_shell.config import validate_settings
from src.components.redirects import (
    SUPPORTED_FORMATS,
    LoadRedirectsInput,
    ParseError,
    detect_format,
    run_load,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def handle_check(args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.is_file():
        logger.error(f"Redirects file {path} not found.")
        sys.exit(1)

    try:
        fmt = args.format or detect_format(path)
    except ParseError as e:
        logger.error(str(e))
        sys.exit(1)

    result = run_load(
        LoadRedirectsInput(data=path.read_bytes(), fmt=fmt),
        fallback=create_fallback_app(),
    )
    if not result.success:
        for error in result.errors:
            print(f"{error.code}: {error.message}", file=sys.stderr)
        sys.exit(1)

    for source in sorted(result.table):
        print(f"{source} -> {result.table[source]}")
    print(f"{len(result.table)} redirects OK.")


def handle_serve(args: argparse.Namespace) -> None:
    settings = Settings()
    if args.file:
        settings.redirects_file = Path(args.file)
    if args.format:
        settings.redirects_format = args.format
    if args.host:
        settings.host = args.host
    if args.port is not None:
        settings.port_value = str(args.port)

    validate_settings(settings)

    try:
        app = create_app(settings)
    except ParseError as e:
        logger.error(f"Failed to load redirects: {e}")
        sys.exit(1)

    uvicorn.run(app, host=settings.host, port=settings.port)


def main() -> None:
    parser = argparse.ArgumentParser(description="urlshort - path to URL redirector")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check
    check_parser = subparsers.add_parser("check", help="Validate a redirects file")
    check_parser.add_argument("file", help="YAML or JSON redirects file")
    check_parser.add_argument("--format", choices=SUPPORTED_FORMATS, help="Override format")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the redirect server")
    serve_parser.add_argument("--file", help="YAML or JSON redirects file")
    serve_parser.add_argument("--format", choices=SUPPORTED_FORMATS, help="Override format")
    serve_parser.add_argument("--host", help="Bind host")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    args = parser.parse_args()

    if args.command == "check":
        handle_check(args)
    elif args.command == "serve":
        handle_serve(args)


if __name__ == "__main__":
    main()
