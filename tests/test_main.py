"""Tests for the console entry point."""

import io
from unittest.mock import patch

from botbus.config import Config
from botbus.main import ConsoleClient, create_bus, run


def _config(tmp_path):
    (tmp_path / "settings.yaml").write_text(
        "commands:\n"
        "  - botbus.commands.help:HelpCommand\n"
        "fallback_command: help\n"
        f"log_dir: {tmp_path / 'logs'}\n"
    )
    return Config(config_dir=tmp_path)


def test_console_client_writes_text():
    """Console client prints the reply text."""
    out = io.StringIO()
    params = ConsoleClient(out).send_message(chat_id=1, text="hello")
    assert out.getvalue() == "hello\n"
    assert params == {"chat_id": 1, "text": "hello"}


def test_create_bus_sets_up_logging_twice(tmp_path):
    """Logging is configured before and after config loads."""
    config = _config(tmp_path)
    with patch("botbus.main.setup_logging") as mock_setup:
        bus = create_bus(config)
    assert mock_setup.call_count == 2
    mock_setup.assert_called_with(config)
    assert list(bus.get_commands()) == ["help"]


def test_run_replies_to_commands_only(tmp_path):
    """Only command lines produce replies."""
    config = _config(tmp_path)
    out = io.StringIO()
    with patch("botbus.main.setup_logging"), patch(
        "botbus.config.get_config", return_value=config
    ):
        run(stdin=io.StringIO("hello\n/help\n\n/unknown\n"), stdout=out)
    lines = out.getvalue().splitlines()
    assert lines == [
        "/help - Show the list of available commands",
        "/help - Show the list of available commands",
    ]
