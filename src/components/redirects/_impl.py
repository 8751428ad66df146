"""
Redirect resolver - exact path lookup in front of a fallback ASGI app.

Key behaviors:
- Matching paths answer 301 with a Location header
- Unknown paths go to the fallback untouched
- Tables are read-only once built; duplicate paths resolve last-wins
- Malformed YAML/JSON input raises ParseError at load time, never per request
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

import yaml
from pydantic import TypeAdapter, ValidationError
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from .models import RedirectRecord
from .ports import LoggerPort

logger = logging.getLogger(__name__)

PERMANENT_REDIRECT = 301

FORMAT_EXTENSIONS: Mapping[str, str] = MappingProxyType(
    {
        ".yaml": "yaml",
        ".yml": "yaml",
        ".json": "json",
    }
)

_records_adapter = TypeAdapter(list[RedirectRecord])


class ParseError(ValueError):
    """Redirect document could not be parsed into path/url records."""

    def __init__(self, fmt: str, message: str) -> None:
        super().__init__(f"invalid {fmt} redirect document: {message}")
        self.fmt = fmt


# --- Table Construction ---


def build_table(records: Iterable[RedirectRecord]) -> Mapping[str, str]:
    """Build a read-only path -> url table. Later records overwrite earlier ones."""
    table: dict[str, str] = {}
    for record in records:
        table[record.path] = record.url
    return MappingProxyType(table)


# --- Resolver ---


class RedirectHandler:
    """
    ASGI app redirecting known paths and delegating the rest.

    The table is copied on construction, so the caller's mapping can change
    afterwards without affecting request handling.
    """

    def __init__(
        self,
        paths_to_urls: Mapping[str, str],
        fallback: ASGIApp,
        logger: LoggerPort | None = None,
    ) -> None:
        self._table: Mapping[str, str] = MappingProxyType(dict(paths_to_urls))
        self._fallback = fallback
        self.logger: LoggerPort = logger if logger is not None else _default_logger()

    @property
    def table(self) -> Mapping[str, str]:
        """Read-only path -> url table."""
        return self._table

    @property
    def fallback(self) -> ASGIApp:
        return self._fallback

    def resolve(self, path: str) -> str | None:
        """Return the target for an exact path, or None."""
        return self._table.get(path)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._fallback(scope, receive, send)
            return

        path: str = scope["path"]
        query: bytes = scope.get("query_string", b"")
        request_url = f"{path}?{query.decode('latin-1')}" if query else path
        self.logger.info("Request url: %s", request_url)

        url = self.resolve(path)
        if url is not None:
            self.logger.info("Redirecting to %s", url)
            response = Response(
                status_code=PERMANENT_REDIRECT,
                headers={"location": escape_non_ascii(url)},
            )
            await response(scope, receive, send)
            return

        self.logger.warning("No url in map for %s", path)
        await self._fallback(scope, receive, send)


def _default_logger() -> LoggerPort:
    return logger


def escape_non_ascii(url: str) -> str:
    """Percent-encode the UTF-8 bytes of non-ASCII characters; ASCII passes through as is."""
    return "".join(
        f"%{byte:02X}" if byte >= 0x80 else chr(byte) for byte in url.encode("utf-8")
    )


def map_handler(
    paths_to_urls: Mapping[str, str],
    fallback: ASGIApp,
    *,
    logger: LoggerPort | None = None,
) -> RedirectHandler:
    """
    Wrap fallback so that any path in paths_to_urls redirects to its url.

    Args:
        paths_to_urls: Exact request path -> destination url.
        fallback: ASGI app called for every path not in the mapping.
        logger: Optional logging sink; defaults to this module's logger.
    """
    return RedirectHandler(paths_to_urls, fallback, logger=logger)


# --- Parsing ---


def _validate_records(data: object, fmt: str, log: LoggerPort) -> list[RedirectRecord]:
    try:
        return _records_adapter.validate_python(data)
    except ValidationError as e:
        log.error("Error: %s", e)
        raise ParseError(fmt, str(e)) from e


def parse_yaml(data: bytes | str, *, logger: LoggerPort | None = None) -> list[RedirectRecord]:
    """
    Parse a YAML sequence of path/url mappings.

    An empty document yields no records.
    Raises ParseError on invalid syntax or shape.
    """
    log = logger if logger is not None else _default_logger()
    try:
        loaded = yaml.safe_load(data)
    except yaml.YAMLError as e:
        log.error("Error: %s", e)
        raise ParseError("yaml", str(e)) from e

    if loaded is None:
        return []
    return _validate_records(loaded, "yaml", log)


def parse_json(data: bytes | str, *, logger: LoggerPort | None = None) -> list[RedirectRecord]:
    """
    Parse a JSON array of path/url objects.

    Raises ParseError on invalid syntax, encoding or shape.
    """
    log = logger if logger is not None else _default_logger()
    try:
        loaded = json.loads(data)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        log.error("Error: %s", e)
        raise ParseError("json", str(e)) from e

    return _validate_records(loaded, "json", log)


# --- Format Loaders ---


def yaml_handler(
    data: bytes | str,
    fallback: ASGIApp,
    *,
    logger: LoggerPort | None = None,
) -> RedirectHandler:
    """
    Build a redirect handler from YAML of the form::

        - path: /some-path
          url: https://www.some-url.com/demo

    Raises ParseError for invalid YAML data; no handler is built in that case.
    """
    records = parse_yaml(data, logger=logger)
    return map_handler(build_table(records), fallback, logger=logger)


def json_handler(
    data: bytes | str,
    fallback: ASGIApp,
    *,
    logger: LoggerPort | None = None,
) -> RedirectHandler:
    """
    Build a redirect handler from a JSON array of ``{"path", "url"}`` objects.

    Raises ParseError for invalid JSON data; no handler is built in that case.
    """
    records = parse_json(data, logger=logger)
    return map_handler(build_table(records), fallback, logger=logger)


def load_handler(
    data: bytes | str,
    fmt: str,
    fallback: ASGIApp,
    *,
    logger: LoggerPort | None = None,
) -> RedirectHandler:
    """Dispatch to the yaml or json loader by format name."""
    if fmt == "yaml":
        return yaml_handler(data, fallback, logger=logger)
    if fmt == "json":
        return json_handler(data, fallback, logger=logger)
    raise ParseError(fmt, f"unsupported format {fmt!r}")


def detect_format(path: str | Path) -> str:
    """Map a file extension to a format name."""
    suffix = Path(path).suffix.lower()
    fmt = FORMAT_EXTENSIONS.get(suffix)
    if fmt is None:
        raise ParseError(suffix or "unknown", f"cannot infer format from {str(path)!r}")
    return fmt
