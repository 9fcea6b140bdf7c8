import logging
from pathlib import Path

import pytest

from mesoscli.httpcli import config, logging_utils, utils


def test_httpcli_event_label_and_phase(monkeypatch):
    events: list[str] = []
    monkeypatch.setattr(logging_utils, "log_line", lambda msg: events.append(msg))

    logging_utils._httpcli_event("state", phase="subscription_loss", kind="code_registered")

    assert events
    line = events[-1]
    assert line.startswith("[HTTPCLI][STATE]")
    assert "phase='subscription_loss'" in line
    assert "kind='code_registered'" in line


def test_httpcli_event_swallows_logging_failures(monkeypatch):
    def _boom(_msg):
        raise RuntimeError("handler exploded")

    monkeypatch.setattr(logging_utils, "log_line", _boom)

    logging_utils._httpcli_event("classify", http_status=503)


def test_log_line_writes_configured_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "client.log"
    monkeypatch.setattr(config, "LOG_FILE", log_path)
    monkeypatch.setattr(utils, "_LOGGER_INITIALISED", False)

    try:
        utils.log_line("[HTTPCLI][CLASSIFY] http_status=503")

        assert utils.get_current_log_path() == log_path
        for handler in utils.LOGGER.handlers:
            handler.flush()
        assert "http_status=503" in log_path.read_text(encoding="utf-8")
        assert utils.LOGGER.propagate is False
        assert utils.LOGGER.level == logging.INFO
    finally:
        utils._configure_logger(None)
