"""
Tests for PersonioLogger, formatters and logging config.
"""

import json
import logging

import pytest

from personio_client.core.logging import (
    JSONFormatter,
    LogFormat,
    LogLevel,
    LoggingConfig,
    PersonioLogger,
    TextFormatter,
    configure_logging,
    get_formatter,
    get_logger,
)
import personio_client.core.logging.logger as logger_module


@pytest.fixture(autouse=True)
def reset_default_logger():
    logger_module._default_logger = None
    yield
    if logger_module._default_logger is not None:
        logger_module._default_logger.close()
    logger_module._default_logger = None


class TestLoggingConfig:

    def test_defaults(self):
        config = LoggingConfig()

        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.TEXT
        assert config.enable_console is True

    def test_create_from_strings(self):
        config = LoggingConfig.create(level="debug", format="JSON")

        assert config.level == LogLevel.DEBUG
        assert config.format == LogFormat.JSON

    def test_file_requires_path(self):
        with pytest.raises(ValueError):
            LoggingConfig.create(enable_file=True)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            LoggingConfig.create(level="LOUD")


class TestPersonioLogger:

    def test_without_config_installs_no_handlers(self):
        logger = PersonioLogger(name="personio_client.tests.plain")

        assert logger.handlers == []
        assert logging.getLogger("personio_client.tests.plain").propagate is True

    def test_console_handler(self):
        logger = PersonioLogger(LoggingConfig.create(level="DEBUG"), name="personio_client.tests.console")

        assert len(logger.handlers) == 1
        assert logger.is_enabled_for(logging.DEBUG)
        logger.close()
        assert logger.handlers == []

    def test_json_file_output_is_masked(self, tmp_path):
        log_file = tmp_path / "logs" / "personio.log"
        config = LoggingConfig.create(
            level="DEBUG",
            format="json",
            enable_console=False,
            enable_file=True,
            file_path=str(log_file),
            extra_fields={"service": "hr-sync"},
        )

        with PersonioLogger(config, name="personio_client.tests.json") as logger:
            logger.info(
                "Authorization token fetched",
                status_code=200,
                authorization="Bearer T1",
                url="https://api.personio.de/v1/auth?client_secret=xyz",
            )

        entry = json.loads(log_file.read_text().strip())
        assert entry["message"] == "Authorization token fetched"
        assert entry["level"] == "INFO"
        assert entry["status_code"] == 200
        assert entry["service"] == "hr-sync"
        assert entry["authorization"] == "***REDACTED***"
        assert "xyz" not in entry["url"]

    def test_level_filtering(self, tmp_path):
        log_file = tmp_path / "personio.log"
        config = LoggingConfig.create(
            level="WARNING", enable_console=False, enable_file=True, file_path=str(log_file)
        )

        logger = PersonioLogger(config, name="personio_client.tests.level")
        logger.info("hidden")
        logger.warning("Request failed", status_code=404)
        logger.close()

        content = log_file.read_text()
        assert "hidden" not in content
        assert "Request failed" in content
        assert "status_code=404" in content

    def test_close_keeps_other_instances_handlers(self, tmp_path):
        name = "personio_client.tests.shared"
        first_file = tmp_path / "first.log"
        second_file = tmp_path / "second.log"

        def file_config(path):
            return LoggingConfig.create(
                level="INFO", enable_console=False, enable_file=True, file_path=str(path)
            )

        first = PersonioLogger(file_config(first_file), name=name)
        second = PersonioLogger(file_config(second_file), name=name)
        shared = logging.getLogger(name)
        assert len(shared.handlers) == 2

        first.close()

        assert shared.handlers == second.handlers
        second.info("Still logging", status_code=200)
        assert "Still logging" in second_file.read_text()
        assert shared.propagate is False

        second.close()

        assert shared.handlers == []
        assert shared.propagate is True
        assert shared.level == logging.NOTSET

    def test_close_keeps_package_null_handler(self):
        package_logger = logging.getLogger("personio_client")
        null_handlers = [h for h in package_logger.handlers if isinstance(h, logging.NullHandler)]

        PersonioLogger(LoggingConfig.create(enable_console=False)).close()

        assert [h for h in package_logger.handlers if isinstance(h, logging.NullHandler)] == null_handlers

    def test_close_is_idempotent(self):
        logger = PersonioLogger(LoggingConfig(), name="personio_client.tests.close")
        logger.close()
        logger.close()

    def test_global_logger(self):
        assert get_logger() is get_logger()

        configured = configure_logging(LoggingConfig.create(enable_console=False))
        assert get_logger() is configured


class TestFormatters:

    def _record(self, **extra):
        record = logging.LogRecord("personio_client", logging.INFO, __file__, 1, "Sending request", (), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_formatter(self):
        output = json.loads(JSONFormatter().format(self._record(method="GET")))

        assert output["message"] == "Sending request"
        assert output["logger"] == "personio_client"
        assert output["method"] == "GET"

    def test_text_formatter(self):
        output = TextFormatter().format(self._record(method="GET", status_code=200))

        assert "[INFO] [personio_client] Sending request" in output
        assert "method=GET" in output
        assert "status_code=200" in output

    def test_get_formatter(self):
        assert isinstance(get_formatter("json"), JSONFormatter)
        assert isinstance(get_formatter("TEXT"), TextFormatter)

        with pytest.raises(ValueError):
            get_formatter("xml")
