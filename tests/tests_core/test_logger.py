"""
Test suite for core.logger module.

Tests cover:
- ColoredFormatter output and record isolation
- setup_logging console and file handlers
- setup_logging_from_config
- get_logger level override
"""

import logging
from types import SimpleNamespace
from pathlib import Path

import pytest

from core.logger import ColoredFormatter, get_logger, setup_logging, setup_logging_from_config


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(level=logging.INFO, msg="hello"):
    return logging.LogRecord("sql.table", level, __file__, 1, msg, None, None)


@pytest.mark.unit
def test_colored_formatter_adds_color_and_emoji():
    formatter = ColoredFormatter("%(emoji)s %(levelname)s %(message)s")

    output = formatter.format(_record(logging.ERROR, "failed"))

    assert "❌" in output
    assert "\033[31mERROR\033[0m" in output
    assert output.endswith("failed")


@pytest.mark.unit
def test_colored_formatter_leaves_record_untouched():
    record = _record(logging.WARNING)

    ColoredFormatter("%(emoji)s %(levelname)s %(message)s").format(record)

    assert record.levelname == "WARNING"
    assert not hasattr(record, "emoji")


@pytest.mark.unit
def test_get_logger_level_override():
    logger = get_logger("tests.logger.override", level="debug")

    assert logger.level == logging.DEBUG
    assert get_logger("tests.logger.plain").name == "tests.logger.plain"


@pytest.mark.integration
def test_setup_logging_console_and_file(tmp_path, restore_root_logger):
    setup_logging(
        log_level="DEBUG",
        log_file="dbutils.log",
        log_dir=str(tmp_path),
        use_colors=False
    )

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2

    logging.getLogger("sql.dml").debug("written to file")
    for handler in root.handlers:
        handler.flush()

    content = (tmp_path / "dbutils.log").read_text(encoding="utf-8")
    assert "sql.dml - DEBUG - written to file" in content


@pytest.mark.unit
def test_setup_logging_without_console(restore_root_logger):
    setup_logging(log_level="WARNING", console_output=False)

    assert restore_root_logger.handlers == []
    assert restore_root_logger.level == logging.WARNING


@pytest.mark.unit
def test_setup_logging_colored_console(restore_root_logger):
    setup_logging(use_colors=True)

    (handler,) = restore_root_logger.handlers
    assert isinstance(handler.formatter, ColoredFormatter)


@pytest.mark.unit
def test_setup_logging_from_config(tmp_path, restore_root_logger):
    settings = SimpleNamespace(
        log_level="ERROR",
        log_file="from_config.log",
        log_dir=Path(tmp_path),
        log_colors=False,
    )

    setup_logging_from_config(settings)

    assert restore_root_logger.level == logging.ERROR
    assert (tmp_path / "from_config.log").exists()


@pytest.mark.unit
def test_setup_logging_returns_installed_handlers(tmp_path, restore_root_logger):
    handlers = setup_logging(log_file="x.log", log_dir=str(tmp_path), use_colors=False)

    assert handlers == restore_root_logger.handlers
    assert isinstance(handlers[1], logging.FileHandler)


@pytest.mark.edge_case
def test_setup_logging_rejects_unknown_level(restore_root_logger):
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logging(log_level="LOUD")


@pytest.mark.unit
def test_setup_logging_from_config_level_override(restore_root_logger):
    settings = SimpleNamespace(
        log_level="ERROR",
        log_file=None,
        log_dir=Path("logs"),
        log_colors=True,
    )

    setup_logging_from_config(settings, log_level="DEBUG")

    assert restore_root_logger.level == logging.DEBUG
