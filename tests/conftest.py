from typing import Any

import pytest
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.types import Receive, Scope, Send


class RecordingFallback:
    """
    Fallback ASGI app that records what it receives.
    Answers 404 with a body echoing method, path and request body.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        body = await request.body()
        self.calls.append(
            {
                "method": request.method,
                "path": scope["path"],
                "query_string": scope.get("query_string", b""),
                "headers": dict(request.headers),
                "body": body,
            }
        )
        response = PlainTextResponse(
            f"fallback {request.method} {scope['path']} {body.decode()}",
            status_code=404,
        )
        await response(scope, receive, send)


class RecordingLogger:
    """In-memory logger satisfying LoggerPort."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def info(self, msg: str, *args: Any) -> None:
        self.records.append(("info", msg % args))

    def warning(self, msg: str, *args: Any) -> None:
        self.records.append(("warning", msg % args))

    def error(self, msg: str, *args: Any) -> None:
        self.records.append(("error", msg % args))

    def levels(self) -> list[str]:
        return [level for level, _ in self.records]


@pytest.fixture
def fallback() -> RecordingFallback:
    return RecordingFallback()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
