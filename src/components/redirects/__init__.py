"""
Redirects component - path to URL redirect resolution.
"""

from ._impl import (
    FORMAT_EXTENSIONS,
    PERMANENT_REDIRECT,
    ParseError,
    RedirectHandler,
    build_table,
    detect_format,
    escape_non_ascii,
    json_handler,
    load_handler,
    map_handler,
    parse_json,
    parse_yaml,
    yaml_handler,
)
from .component import SUPPORTED_FORMATS, run, run_load
from .models import (
    LoadRedirectsInput,
    LoadRedirectsOutput,
    RedirectLoadError,
    RedirectRecord,
)
from .ports import LoggerPort

__all__ = [
    # Entry points
    "run",
    "run_load",
    # Models
    "LoadRedirectsInput",
    "LoadRedirectsOutput",
    "RedirectLoadError",
    "RedirectRecord",
    # Ports
    "LoggerPort",
    # _impl re-exports
    "FORMAT_EXTENSIONS",
    "PERMANENT_REDIRECT",
    "ParseError",
    "RedirectHandler",
    "SUPPORTED_FORMATS",
    "build_table",
    "detect_format",
    "escape_non_ascii",
    "json_handler",
    "load_handler",
    "map_handler",
    "parse_json",
    "parse_yaml",
    "yaml_handler",
]
