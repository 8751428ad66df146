"""
Redirects component input/output models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict
from starlette.types import ASGIApp


# --- Redirect Record ---


class RedirectRecord(BaseModel):
    """Single path -> url entry as read from a YAML or JSON document."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    path: str
    url: str


# --- Load Error ---


@dataclass(frozen=True)
class RedirectLoadError:
    """Error reported while loading a redirect document."""

    code: str
    message: str


# --- Input Models ---


@dataclass(frozen=True)
class LoadRedirectsInput:
    """Input for building a handler from a serialized redirect document."""

    data: bytes | str
    fmt: str = "yaml"


# --- Output Models ---


@dataclass(frozen=True)
class LoadRedirectsOutput:
    """Output of a load operation."""

    handler: ASGIApp | None
    table: Mapping[str, str] = field(default_factory=dict)
    errors: list[RedirectLoadError] = field(default_factory=list)
    success: bool = True
