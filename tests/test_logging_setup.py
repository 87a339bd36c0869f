"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from route_replay import logging_setup


def rich_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]


def test_resolve_level_defaults_to_warning(monkeypatch) -> None:
    monkeypatch.delenv(logging_setup.LOG_LEVEL_ENV, raising=False)
    assert logging_setup.resolve_level() == logging.WARNING


def test_resolve_level_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv(logging_setup.LOG_LEVEL_ENV, "debug")
    assert logging_setup.resolve_level() == logging.DEBUG


def test_resolve_level_invalid_defaults(monkeypatch) -> None:
    monkeypatch.setenv(logging_setup.LOG_LEVEL_ENV, "notalevel")
    assert logging_setup.resolve_level() == logging.WARNING
    assert logging_setup.resolve_level("info") == logging.INFO
    assert logging_setup.resolve_level(logging.ERROR) == logging.ERROR


def test_init_logging_installs_single_rich_handler() -> None:
    root = logging.getLogger()
    root.handlers.clear()

    level = logging_setup.init_logging("info")
    logging_setup.init_logging("debug")

    assert level == logging.INFO
    assert len(rich_handlers()) == 1
    assert root.level == logging.DEBUG
    assert rich_handlers()[0].level == logging.DEBUG


def test_set_console_level_adjusts_rich_handler_only(tmp_path) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    file_handler = logging.FileHandler(tmp_path / "app.log")
    file_handler.setLevel(logging.INFO)
    root.addHandler(file_handler)
    try:
        logging_setup.init_logging("info")
        logging_setup.set_console_level(logging.ERROR)

        assert rich_handlers()[0].level == logging.ERROR
        assert file_handler.level == logging.INFO
    finally:
        file_handler.close()
