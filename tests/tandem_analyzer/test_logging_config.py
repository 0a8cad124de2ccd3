from __future__ import annotations

import logging

import pytest
from pythonjsonlogger import jsonlogger

from tandem_analyzer.logging_config import LOG_FORMAT_ENV, PLAIN_FORMAT, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    werkzeug_level = logging.getLogger("werkzeug").level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("werkzeug").setLevel(werkzeug_level)


def test_json_is_the_default(restore_root_logger, monkeypatch):
    monkeypatch.delenv(LOG_FORMAT_ENV, raising=False)

    configure_logging()

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    assert root.level == logging.INFO


def test_env_var_selects_plain(restore_root_logger, monkeypatch):
    monkeypatch.setenv(LOG_FORMAT_ENV, "plain")

    configure_logging(level=logging.DEBUG)

    formatter = restore_root_logger.handlers[0].formatter
    assert not isinstance(formatter, jsonlogger.JsonFormatter)
    assert formatter._fmt == PLAIN_FORMAT
    assert restore_root_logger.level == logging.DEBUG


def test_argument_overrides_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv(LOG_FORMAT_ENV, "plain")

    configure_logging(force_format="JSON")

    assert isinstance(restore_root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_repeated_calls_do_not_stack_handlers(restore_root_logger):
    configure_logging(force_format="plain")
    configure_logging(force_format="plain")
    assert len(restore_root_logger.handlers) == 1


def test_werkzeug_request_logs_are_quietened(restore_root_logger):
    configure_logging(force_format="plain")
    assert logging.getLogger("werkzeug").level >= logging.WARNING
