"""Unit tests for runtime configuration.

Tests cover:
- Log level parsing, including names that are not logging levels
- CORS origin parsing and defaults
- Vocabulary path override
- setup_logging handler replacement
- Log level applied when the HTTP app is built
"""

import importlib
import logging
from pathlib import Path

import pytest

from rightofway import config


@pytest.fixture
def scratch_logger():
    """A throwaway logger, cleared after the test."""
    logger = logging.getLogger("rightofway-test-scratch")
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestGetLogLevel:
    """Tests for get_log_level()."""

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RIGHTOFWAY_LOG_LEVEL", raising=False)

        assert config.get_log_level() == logging.INFO
        assert config.get_log_level(default="WARNING") == logging.WARNING

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("debug", logging.DEBUG),
            (" error ", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_configured_level(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: int
    ) -> None:
        monkeypatch.setenv("RIGHTOFWAY_LOG_LEVEL", value)
        assert config.get_log_level() == expected

    @pytest.mark.parametrize("value", ["basic_format", "verbose", "Logger"])
    def test_unknown_name_falls_back(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """Attributes of the logging module are not levels."""
        monkeypatch.setenv("RIGHTOFWAY_LOG_LEVEL", value)

        assert config.get_log_level() == logging.INFO
        assert config.get_log_level(default="WARNING") == logging.WARNING


class TestGetCorsOrigins:
    """Tests for get_cors_origins()."""

    def test_defaults_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RIGHTOFWAY_CORS_ORIGINS", raising=False)
        assert config.get_cors_origins() == config.DEFAULT_CORS_ORIGINS

    def test_defaults_when_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RIGHTOFWAY_CORS_ORIGINS", "")
        assert config.get_cors_origins() == config.DEFAULT_CORS_ORIGINS

    def test_defaults_are_a_copy(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RIGHTOFWAY_CORS_ORIGINS", raising=False)

        config.get_cors_origins().append("http://evil.example")

        assert "http://evil.example" not in config.DEFAULT_CORS_ORIGINS

    def test_comma_separated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(
            "RIGHTOFWAY_CORS_ORIGINS", " https://ref.example , http://localhost:3000,,  ,"
        )

        assert config.get_cors_origins() == [
            "https://ref.example",
            "http://localhost:3000",
        ]


class TestGetVocabularyPath:
    """Tests for get_vocabulary_path()."""

    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RIGHTOFWAY_VOCABULARY", raising=False)
        assert config.get_vocabulary_path() is None

    def test_set(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = tmp_path / "words.yaml"
        monkeypatch.setenv("RIGHTOFWAY_VOCABULARY", str(path))

        assert config.get_vocabulary_path() == path


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_sets_level_and_handler(self, scratch_logger: logging.Logger) -> None:
        config.setup_logging(logging.DEBUG, scratch_logger.name)

        assert scratch_logger.level == logging.DEBUG
        names = [h.get_name() for h in scratch_logger.handlers]
        assert names == [config.LOG_HANDLER_NAME]
        assert scratch_logger.handlers[0].level == logging.DEBUG

    def test_repeated_calls_replace_handler(self, scratch_logger: logging.Logger) -> None:
        config.setup_logging(logging.DEBUG, scratch_logger.name)
        config.setup_logging(logging.ERROR, scratch_logger.name)

        assert len(scratch_logger.handlers) == 1
        assert scratch_logger.level == logging.ERROR
        assert scratch_logger.handlers[0].level == logging.ERROR

    def test_other_handlers_kept(self, scratch_logger: logging.Logger) -> None:
        other = logging.NullHandler()
        scratch_logger.addHandler(other)

        config.setup_logging(logging.INFO, scratch_logger.name)

        assert other in scratch_logger.handlers
        assert len(scratch_logger.handlers) == 2


class TestAppLogging:
    """The HTTP app applies RIGHTOFWAY_LOG_LEVEL to the package loggers."""

    @pytest.fixture
    def package_logger(self):
        logger = logging.getLogger("rightofway")
        level = logger.level
        yield logger
        logger.setLevel(level)
        for handler in list(logger.handlers):
            if handler.get_name() == config.LOG_HANDLER_NAME:
                handler.setLevel(level)

    @pytest.mark.parametrize(
        "value,expected",
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("nonsense", logging.INFO)],
    )
    def test_level_from_environment(
        self,
        monkeypatch: pytest.MonkeyPatch,
        package_logger: logging.Logger,
        value: str,
        expected: int,
    ) -> None:
        import rightofway.main

        monkeypatch.setenv("RIGHTOFWAY_LOG_LEVEL", value)
        importlib.reload(rightofway.main)

        assert package_logger.level == expected
        assert logging.getLogger("rightofway.engine.phrase").getEffectiveLevel() == expected

    def test_single_console_handler(
        self, monkeypatch: pytest.MonkeyPatch, package_logger: logging.Logger
    ) -> None:
        import rightofway.main

        monkeypatch.delenv("RIGHTOFWAY_LOG_LEVEL", raising=False)
        importlib.reload(rightofway.main)
        importlib.reload(rightofway.main)

        names = [h.get_name() for h in package_logger.handlers]
        assert names.count(config.LOG_HANDLER_NAME) == 1
