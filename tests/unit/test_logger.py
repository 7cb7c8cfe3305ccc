"""Unit tests for session logger setup."""

import pytest
from loguru import logger

from restyle.utils.logger import setup_logger


@pytest.fixture
def session_log(tmp_path):
    log_file = setup_logger(
        "template", log_dir=tmp_path / "session", extra_provenance={"Template source": "file"}
    )
    yield log_file
    logger.remove()


@pytest.mark.unit
def test_setup_logger_creates_session_file(session_log, tmp_path):
    """Test the log file is named after the context inside the session directory."""
    assert session_log == tmp_path / "session" / "template.log"
    assert session_log.exists()


@pytest.mark.unit
def test_setup_logger_writes_provenance(session_log):
    """Test the provenance header records the log file and extra context."""
    text = session_log.read_text(encoding="utf-8")

    assert "Template source: file" in text
    assert f"Log file: {session_log}" in text
    assert "Python: " in text


@pytest.mark.unit
def test_setup_logger_file_sink_keeps_debug(session_log):
    """Test debug lines reach the file sink."""
    logger.debug("[template] Expanded 1 experience block(s)")

    assert "DEBUG   | [template] Expanded 1 experience block(s)" in session_log.read_text(
        encoding="utf-8"
    )
