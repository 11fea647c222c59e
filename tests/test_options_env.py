"""Tests for configuration options, environment overrides and logging setup."""

from __future__ import annotations

import logging
from dataclasses import FrozenInstanceError
from pathlib import Path
from typing import Iterator

import pytest

from cfgtree import ConfigurationOptions, MemoryConfiguration
from cfgtree.utils import env_flag, env_str, setup_logging


def test_default_options() -> None:
    options = ConfigurationOptions()

    assert options.path_separator == "."
    assert options.copy_defaults is False
    assert MemoryConfiguration().options == options


@pytest.mark.parametrize("separator", ["", "::", None])
def test_options_reject_invalid_separator(separator: object) -> None:
    with pytest.raises(ValueError, match="single character"):
        ConfigurationOptions(path_separator=separator)  # type: ignore[arg-type]


def test_options_cannot_be_reassigned_after_construction() -> None:
    config = MemoryConfiguration()
    config.set("a.b", 1)

    with pytest.raises(FrozenInstanceError):
        config.options.path_separator = "::"  # type: ignore[misc]

    assert config.options.path_separator == "."
    assert config.get("a.b") == 1


def test_env_flag_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CFGTREE_TEST_FLAG", raising=False)
    assert env_flag("CFGTREE_TEST_FLAG") is False
    assert env_flag("CFGTREE_TEST_FLAG", True) is True

    for raw in ["0", "false", "No", " off "]:
        monkeypatch.setenv("CFGTREE_TEST_FLAG", raw)
        assert env_flag("CFGTREE_TEST_FLAG", True) is False
    for raw in ["1", "true", "yes", "anything"]:
        monkeypatch.setenv("CFGTREE_TEST_FLAG", raw)
        assert env_flag("CFGTREE_TEST_FLAG") is True


def test_env_str_keeps_raw_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CFGTREE_TEST_STR", raising=False)
    assert env_str("CFGTREE_TEST_STR", ".") == "."

    monkeypatch.setenv("CFGTREE_TEST_STR", "")
    assert env_str("CFGTREE_TEST_STR", ".") == "."

    monkeypatch.setenv("CFGTREE_TEST_STR", " ")
    assert env_str("CFGTREE_TEST_STR", ".") == " "


def test_options_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CFGTREE_PATH_SEPARATOR", "/")
    monkeypatch.setenv("CFGTREE_COPY_DEFAULTS", "yes")

    options = ConfigurationOptions.from_env()
    config = MemoryConfiguration(options=options)
    config.set("a/b", 1)

    assert options == ConfigurationOptions(path_separator="/", copy_defaults=True)
    assert config.get_keys(True) == ["a", "a/b"]


def test_options_from_env_with_custom_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_PATH_SEPARATOR", raising=False)
    monkeypatch.setenv("APP_COPY_DEFAULTS", "off")

    assert ConfigurationOptions.from_env("APP") == ConfigurationOptions()


def test_options_from_env_rejects_long_separator(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CFGTREE_PATH_SEPARATOR", "->")

    with pytest.raises(ValueError):
        ConfigurationOptions.from_env()


@pytest.fixture
def restore_cfgtree_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("cfgtree")
    saved = (list(logger.handlers), logger.level, logger.propagate, dict(logger.__dict__))
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers, level, propagate, attributes = saved
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
    for name in ("_cfgtree_configured", "_cfgtree_logs_dir", "_cfgtree_logs_level"):
        if name in attributes:
            setattr(logger, name, attributes[name])
        elif hasattr(logger, name):
            delattr(logger, name)


def test_setup_logging_writes_debug_records_to_file(
    tmp_path: Path, restore_cfgtree_logger: logging.Logger
) -> None:
    setup_logging(logging.DEBUG, tmp_path / "logs")

    config = MemoryConfiguration()
    config.add_default("server.port", 1)
    config.get_configuration_section("server")
    for handler in restore_cfgtree_logger.handlers:
        handler.flush()

    text = (tmp_path / "logs" / "cfgtree.log").read_text(encoding="utf-8")
    assert "Materializing section 'server' from defaults" in text
    assert "cfgtree.memory" in text


def test_setup_logging_is_idempotent(restore_cfgtree_logger: logging.Logger) -> None:
    setup_logging(logging.INFO)
    handlers = list(restore_cfgtree_logger.handlers)
    setup_logging(logging.INFO)

    assert restore_cfgtree_logger.handlers == handlers
    assert len(handlers) == 1

    setup_logging(logging.WARNING)
    assert restore_cfgtree_logger.level == logging.WARNING
    assert len(restore_cfgtree_logger.handlers) == 1
    assert restore_cfgtree_logger.propagate is False
