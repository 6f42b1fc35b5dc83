"""Tests for the development entrypoint."""

from __future__ import annotations

import main


def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.host == "127.0.0.1"
    assert args.port == 8000
    assert args.seed is None
    assert not args.debug


def test_main_exports_settings_and_starts_server(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setenv("FROSTWIND_SEED", "1")
    monkeypatch.setenv("FROSTWIND_DEBUG_MODE", "false")
    monkeypatch.setenv("FROSTWIND_LOG_LEVEL", "INFO")

    main.main(["--seed", "9", "--debug", "--port", "9001", "--log-level", "debug"])

    assert main.os.environ["FROSTWIND_SEED"] == "9"
    assert main.os.environ["FROSTWIND_DEBUG_MODE"] == "true"
    assert main.os.environ["FROSTWIND_LOG_LEVEL"] == "DEBUG"
    assert calls == [
        (main.APP_PATH, {"host": "127.0.0.1", "port": 9001, "reload": False}),
    ]
