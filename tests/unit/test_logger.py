"""Unit tests for the shared session logger setup."""

import pytest
from loguru import logger

from folio.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def _reset_loguru():
    yield
    logger.remove()


@pytest.mark.unit
def test_setup_logger_writes_provenance_to_session_file(tmp_path):
    log_dir = tmp_path / "logs" / "render_20251114_123456"

    log_file = setup_logger("render", log_dir, extra_provenance={"Browser engine": "chromium"})
    logger.debug("detail only the file sees")

    assert log_file == log_dir / "render.log"
    text = log_file.read_text()
    assert "Working directory:" in text
    assert "Browser engine: chromium" in text
    assert f"Log file: {log_file}" in text
    assert "detail only the file sees" in text


@pytest.mark.unit
def test_console_sink_shows_info_but_not_debug(tmp_path, capsys):
    setup_logger("render", tmp_path)
    logger.info("[render] visible")
    logger.debug("[render] hidden")

    out = capsys.readouterr().out
    assert "[render] visible" in out
    assert "[render] hidden" not in out


@pytest.mark.unit
def test_console_disabled_keeps_stdout_silent(tmp_path, capsys):
    log_file = setup_logger("style", tmp_path, console=False)
    logger.warning("[style] glob matched no files")

    assert capsys.readouterr().out == ""
    assert "[style] glob matched no files" in log_file.read_text()


@pytest.mark.unit
def test_second_session_does_not_write_to_first_log(tmp_path):
    first = setup_logger("render", tmp_path / "one", console=False)
    second = setup_logger("render", tmp_path / "two", console=False)
    logger.info("second session only")

    assert "second session only" not in first.read_text()
    assert "second session only" in second.read_text()
