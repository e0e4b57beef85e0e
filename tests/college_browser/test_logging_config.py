import logging

import pytest
from pythonjsonlogger import jsonlogger

from college_browser.logging_config import (
    LOG_FORMAT_ENV,
    LOG_LEVEL_ENV,
    configure_logging,
    resolve_log_format,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_is_default(monkeypatch):
    monkeypatch.delenv(LOG_FORMAT_ENV, raising=False)
    configure_logging()

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_env_selects_plain(monkeypatch):
    monkeypatch.setenv(LOG_FORMAT_ENV, "plain")
    configure_logging(level=logging.DEBUG)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_argument_wins_over_env(monkeypatch):
    monkeypatch.setenv(LOG_FORMAT_ENV, "plain")
    configure_logging(force_format="json")
    assert isinstance(logging.getLogger().handlers[0].formatter, jsonlogger.JsonFormatter)


def test_level_read_from_env_when_not_given(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    configure_logging(force_format="plain")
    assert logging.getLogger().level == logging.WARNING


def test_repeated_setup_keeps_one_handler():
    configure_logging(force_format="plain")
    configure_logging(force_format="json")
    assert len(logging.getLogger().handlers) == 1


@pytest.mark.parametrize("raw, expected", [(" PLAIN ", "plain"), ("Json", "json")])
def test_resolve_log_format_normalises(raw, expected):
    assert resolve_log_format(raw) == expected


def test_unknown_format_rejected(monkeypatch):
    monkeypatch.setenv(LOG_FORMAT_ENV, "xml")
    with pytest.raises(ValueError):
        resolve_log_format()
