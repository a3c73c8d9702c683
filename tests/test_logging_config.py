import logging

from pie_menu.config import AppConfig
from pie_menu.logging_config import setup_logging


def _config(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return AppConfig(
        log_level="INFO",
        file_log_level="DEBUG",
        log_dir=str(log_dir),
        log_file=str(log_dir / "server.log"),
    )


def test_setup_logging_replaces_handlers(tmp_path):
    config = _config(tmp_path)
    logger = setup_logging(config)
    logger_again = setup_logging(config)

    assert logger is logger_again
    assert logger.name == "pie_menu"
    assert logger.propagate is False
    assert len(logger.handlers) == 2
    levels = sorted(handler.level for handler in logger.handlers)
    assert levels == [logging.DEBUG, logging.INFO]


def test_setup_logging_writes_debug_records_to_file(tmp_path):
    config = _config(tmp_path)
    logger = setup_logging(config)

    logger.debug("Session %s started", 7)
    for handler in logger.handlers:
        handler.flush()

    content = (tmp_path / "logs" / "server.log").read_text(encoding="utf-8")
    assert "Session 7 started" in content
    assert "DEBUG" in content
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
