# tests/unit/test_entrypoint.py
"""Tests for `python -m content_forge` startup wiring."""

import json
import logging
from unittest.mock import patch

import pytest
from fastapi import FastAPI

from content_forge import __main__ as entrypoint
from content_forge.logging_config import JsonFormatter

LOGGER_NAMES = ["uvicorn", "uvicorn.error", "uvicorn.access"]


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def keyless_env(monkeypatch):
    for name in ["GEMINI_API_KEY", "API_KEY", "OPENAI_API_KEY", "LOG_LEVEL", "HOST", "PORT"]:
        monkeypatch.delenv(name, raising=False)


class TestMain:
    def test_starts_without_key(self, keyless_env, restore_logging):
        """A missing key still hands a built app to uvicorn."""
        with patch.object(entrypoint.uvicorn, "run") as mock_run:
            entrypoint.main()

        mock_run.assert_called_once()
        app = mock_run.call_args.args[0]
        assert isinstance(app, FastAPI)
        assert app.state.settings.api_key is None
        assert mock_run.call_args.kwargs["host"] == "127.0.0.1"
        assert mock_run.call_args.kwargs["port"] == 8000

    def test_uvicorn_keeps_json_handlers(self, keyless_env, restore_logging):
        """uvicorn is told not to install its own logging config."""
        with patch.object(entrypoint.uvicorn, "run") as mock_run:
            entrypoint.main()

        assert mock_run.call_args.kwargs["log_config"] is None
        for name in LOGGER_NAMES:
            handlers = logging.getLogger(name).handlers
            assert len(handlers) == 1
            assert isinstance(handlers[0].formatter, JsonFormatter)

    def test_missing_key_warning_is_json(self, keyless_env, restore_logging, capsys):
        """The startup warning goes through the JSON handler."""
        with patch.object(entrypoint.uvicorn, "run"):
            entrypoint.main()

        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        records = [json.loads(line) for line in lines if line.startswith("{")]
        warnings = [r for r in records if "API key not found" in r["msg"]]
        assert len(warnings) == 1
        assert warnings[0]["level"] == "WARNING"
        assert warnings[0]["logger"] == "content_forge.config"
