"""
Redirects component - build redirect handlers from serialized documents.

Entry point for shells (app factory, CLI) that want errors as data
instead of exceptions.

Invariants:
- I1: A handler is only returned when the whole document parsed
- I2: Duplicate paths resolve to the last occurrence
- I3: The returned table is read-only
"""

from __future__ import annotations

from starlette.types import ASGIApp

from ._impl import ParseError, load_handler
from .models import LoadRedirectsInput, LoadRedirectsOutput, RedirectLoadError
from .ports import LoggerPort

SUPPORTED_FORMATS = ("yaml", "json")


def run_load(
    inp: LoadRedirectsInput,
    *,
    fallback: ASGIApp,
    logger: LoggerPort | None = None,
) -> LoadRedirectsOutput:
    """
    Load a redirect document and wrap fallback with the resulting table.

    Args:
        inp: Raw document and its format name.
        fallback: ASGI app for unmatched paths.
        logger: Optional logging sink passed through to the handler.

    Returns:
        LoadRedirectsOutput with the handler and table, or errors.
    """
    if inp.fmt not in SUPPORTED_FORMATS:
        return LoadRedirectsOutput(
            handler=None,
            errors=[
                RedirectLoadError(
                    code="unsupported_format",
                    message=(
                        f"Format must be one of {', '.join(SUPPORTED_FORMATS)}, "
                        f"got {inp.fmt!r}"
                    ),
                )
            ],
            success=False,
        )

    try:
        handler = load_handler(inp.data, inp.fmt, fallback, logger=logger)
    except ParseError as e:
        return LoadRedirectsOutput(
            handler=None,
            errors=[RedirectLoadError(code="parse_error", message=str(e))],
            success=False,
        )

    return LoadRedirectsOutput(handler=handler, table=handler.table)


def run(
    inp: LoadRedirectsInput,
    *,
    fallback: ASGIApp,
    logger: LoggerPort | None = None,
) -> LoadRedirectsOutput:
    """Alias for run_load."""
    return run_load(inp, fallback=fallback, logger=logger)
