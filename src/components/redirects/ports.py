"""
Redirects component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerPort(Protocol):
    """Logging sink for request and load events.

    ``logging.Logger`` satisfies this interface; tests may pass a recorder.
    """

    def info(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...
