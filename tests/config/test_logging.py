"""Tests for structlog configuration and command context."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from walidator.cli import cli
from walidator.config.logging import HANDLER_NAME, bind_command, configure_logging


@pytest.fixture(autouse=True)
def _restore_walidator_level() -> Iterator[None]:
    wal = logging.getLogger("walidator")
    level = wal.level
    yield
    wal.setLevel(level)


def _ours(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if h.get_name() == HANDLER_NAME]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("walidator").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("walidator").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("walidator.test").warning("json test", rule="latitude")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["rule"] == "latitude"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "walidator.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("walidator.plugins.manager").debug("Registered plugin: geo")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Registered plugin: geo"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "walidator.plugins.manager"

    def test_json_traceback_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        try:
            raise RuntimeError("plugin exploded")
        except RuntimeError:
            logging.getLogger("walidator.plugins.manager").warning("Failed to collect rules", exc_info=True)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Failed to collect rules"
        assert isinstance(parsed["exception"], list)
        assert parsed["exception"][0]["exc_value"] == "plugin exploded"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("walidator.services.validation").debug("noise")
        assert capfd.readouterr().err == ""

    def test_repeated_calls_replace_own_handler(self) -> None:
        root = logging.getLogger()
        foreign = logging.NullHandler()
        root.addHandler(foreign)
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(_ours(root)) == 1
        assert foreign in root.handlers


class TestBindCommand:
    def test_context_on_stdlib_records(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        bind_command("check", rule="uuid", param="")
        logging.getLogger("walidator.services.validation").warning("slow rule")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["command"] == "check"
        assert parsed["rule"] == "uuid"

    def test_rebinding_drops_previous_context(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        bind_command("check", rule="uuid")
        bind_command("rules")
        logging.getLogger("walidator").warning("listing")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["command"] == "rules"
        assert "rule" not in parsed

    @pytest.mark.usefixtures("project_root")
    def test_cli_binds_command(self, cli_runner) -> None:
        cli_runner.invoke(cli, ["check", "latitude", "1"])
        assert structlog.contextvars.get_contextvars() == {"command": "check", "rule": "latitude", "param": ""}
