"""
Redirects component entry point tests.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from src.components.redirects import LoadRedirectsInput, run, run_load
from tests.conftest import RecordingFallback, RecordingLogger


class TestRunLoad:
    """Errors are reported as data, never raised."""

    def test_yaml_success(self, fallback: RecordingFallback) -> None:
        inp = LoadRedirectsInput(data=b"- path: /go\n  url: https://golang.org\n", fmt="yaml")

        result = run_load(inp, fallback=fallback)

        assert result.success is True
        assert result.errors == []
        assert dict(result.table) == {"/go": "https://golang.org"}
        assert result.handler is not None

        response = TestClient(result.handler).get("/go", follow_redirects=False)
        assert response.status_code == 301

    def test_json_success(self, fallback: RecordingFallback) -> None:
        inp = LoadRedirectsInput(data='[{"path":"/go","url":"https://golang.org"}]', fmt="json")

        result = run_load(inp, fallback=fallback)

        assert result.success is True
        assert dict(result.table) == {"/go": "https://golang.org"}

    def test_default_format_is_yaml(self, fallback: RecordingFallback) -> None:
        result = run_load(LoadRedirectsInput(data=b"- path: /a\n  url: /b\n"), fallback=fallback)

        assert dict(result.table) == {"/a": "/b"}

    def test_parse_error_reported(
        self, fallback: RecordingFallback, recording_logger: RecordingLogger
    ) -> None:
        inp = LoadRedirectsInput(data=b'[{"path":"/go"}]', fmt="json")

        result = run_load(inp, fallback=fallback, logger=recording_logger)

        assert result.success is False
        assert result.handler is None
        assert dict(result.table) == {}
        assert len(result.errors) == 1
        assert result.errors[0].code == "parse_error"
        assert "json" in result.errors[0].message
        assert recording_logger.levels() == ["error"]

    def test_unsupported_format(self, fallback: RecordingFallback) -> None:
        result = run_load(LoadRedirectsInput(data=b"", fmt="toml"), fallback=fallback)

        assert result.success is False
        assert result.handler is None
        assert result.errors[0].code == "unsupported_format"

    def test_logger_passed_to_handler(
        self, fallback: RecordingFallback, recording_logger: RecordingLogger
    ) -> None:
        inp = LoadRedirectsInput(data=b"- path: /a\n  url: https://x\n")
        result = run(inp, fallback=fallback, logger=recording_logger)
        assert result.handler is not None

        TestClient(result.handler).get("/missing", follow_redirects=False)

        assert recording_logger.levels() == ["info", "warning"]
