from __future__ import annotations

import pytest

from scripts import run_server


def test_parse_args_defaults() -> None:
    args = run_server.parse_args([])
    assert args.host == "0.0.0.0"
    assert args.port == 8000
    assert args.reload is False


def test_main_runs_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, dict]] = []
    configured: list[object] = []

    def fake_run(target: str, **kwargs) -> None:
        calls.append((target, kwargs))

    monkeypatch.setattr(run_server.uvicorn, "run", fake_run)
    monkeypatch.setattr(run_server, "configure_logging_from_settings", configured.append)

    run_server.main(["--host", "127.0.0.1", "--port", "9001", "--reload"])

    assert configured, "logging was not configured"
    target, kwargs = calls[0]
    assert target == "app.web.main:app"
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is True
    assert kwargs["log_config"] is None
