import logging
from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.types import ASGIApp

from src.api.deps import Settings, get_settings
from src.components.redirects import detect_format, load_handler, map_handler

logger = logging.getLogger(__name__)

# Built-in redirects served even when no redirects file is configured.
# Entries loaded from a file take precedence over these.
DEFAULT_REDIRECTS: Mapping[str, str] = {
    "/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort",
    "/yaml-godoc": "https://godoc.org/gopkg.in/yaml.v2",
}


def create_fallback_app() -> FastAPI:
    """App answering every path the redirect tables do not know."""
    fallback = FastAPI(
        title="urlshort",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
    )

    @fallback.get("/", response_class=PlainTextResponse)
    def hello() -> str:
        return "Hello, world!"

    @fallback.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "urlshort"}

    return fallback


def create_app(settings: Settings | None = None) -> ASGIApp:
    """
    Build the served ASGI app.

    Layers, outermost first: file redirects (if configured), built-in
    redirects, fallback app. Raises ParseError if the file is malformed.
    """
    settings = settings or get_settings()

    app: ASGIApp = map_handler(DEFAULT_REDIRECTS, create_fallback_app())

    if settings.redirects_file is not None:
        fmt = settings.redirects_format or detect_format(settings.redirects_file)
        data = settings.redirects_file.read_bytes()
        app = load_handler(data, fmt, app)
        logger.info("Redirects loaded from %s (%s)", settings.redirects_file, fmt)

    return app
