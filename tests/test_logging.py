"""
Logging Tests
=============
Tests for the structlog/stdlib logging setup.
"""

import json
import logging

import pytest
import structlog


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def _json_lines(text):
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


class TestLogging:
    """Tests for setup_logging."""

    def test_json_output_carries_event_context(self, capsys, restore_logging):
        """Keyword context should become top-level JSON keys."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.log_setup import setup_logging

        setup_logging(service_name="eqcrypt-test", level="INFO", json_output=True)
        HashEngine().generate("tester", "hunter2", 3)

        records = _json_lines(capsys.readouterr().out)
        generated = [r for r in records if r["message"] == "Hash generated"]

        assert generated
        assert generated[0]["mode"] == 3
        assert generated[0]["scheme"] == "legacy"
        assert generated[0]["service"] == "eqcrypt-test"

    def test_event_keys_do_not_replace_record_fields(self, capsys, restore_logging):
        """The configured level is reported without touching the record level."""
        from eqcrypt.log_setup import setup_logging

        setup_logging(level="DEBUG", json_output=True)

        records = _json_lines(capsys.readouterr().out)
        configured = [r for r in records if r["message"] == "Logging configured"]

        assert configured
        assert configured[0]["level"] == "INFO"
        assert configured[0]["log_level"] == "DEBUG"

    def test_credentials_never_logged(self, capsys, restore_logging):
        """Passwords and usernames must not reach the log."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.log_setup import setup_logging

        setup_logging(level="DEBUG", json_output=True)
        engine = HashEngine()
        stored = engine.generate("tester-account", "hunter2-secret", 14)
        engine.identify_and_verify(stored, "hunter2-secret")

        out = capsys.readouterr().out

        assert "hunter2-secret" not in out
        assert "tester-account" not in out
        assert stored not in out

    def test_level_filters(self, capsys, restore_logging):
        """Events below the configured level should be dropped."""
        from eqcrypt.engine import HashEngine
        from eqcrypt.log_setup import setup_logging

        setup_logging(level="WARNING", json_output=True)
        HashEngine().generate("tester", "hunter2", 1)

        assert not [r for r in _json_lines(capsys.readouterr().out) if r["message"] == "Hash generated"]

    def test_plain_text_output(self, capsys, restore_logging):
        """Non-JSON output should use the pipe-separated format."""
        from eqcrypt.log_setup import setup_logging

        setup_logging(level="INFO", json_output=False)

        assert "| INFO     | eqcrypt.log_setup | Logging configured" in capsys.readouterr().out
