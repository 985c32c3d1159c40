import logging

import pytest
from pydantic import ValidationError

from utils.logger import LOGGER_NAME, configure_logging, get_logger
from utils.settings import Settings, get_settings


@pytest.fixture
def restore_level():
    yield
    logging.getLogger(LOGGER_NAME).setLevel(logging.INFO)


def test_get_logger_namespaces_under_application_logger():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("trust.prober").name == f"{LOGGER_NAME}.trust.prober"
    assert logging.getLogger(LOGGER_NAME).handlers


def test_configure_logging_installs_single_handler(restore_level):
    logger = configure_logging("debug")
    again = configure_logging(logging.INFO)

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.propagate is False
    assert logger.level == logging.INFO


def test_configure_logging_uses_log_level_setting(monkeypatch, restore_level):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    get_settings.cache_clear()

    logger = configure_logging()

    assert logger.level == logging.WARNING


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()
