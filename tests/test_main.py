"""Tests for the CLI entry point."""

from __future__ import annotations

import io
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from rocketchat_webhook.__main__ import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    configure_logging,
    create_parser,
    main,
    read_text,
    run_config_check,
    run_send,
    validate_config,
)
from rocketchat_webhook.client import SendResult
from rocketchat_webhook.exceptions import ResponseStatusError

WEBHOOK_URL = "https://chat.example.com/hooks/abc/secrettoken"


class TestCreateParser:
    """Tests for argument parser creation."""

    def test_parser_has_version(self):
        """Parser should have version flag."""
        parser = create_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_parser_text_words(self):
        """Parser should collect positional words."""
        parser = create_parser()
        args = parser.parse_args(["Deploy", "finished"])
        assert args.text == ["Deploy", "finished"]

    def test_parser_channel(self):
        """Parser should accept -c/--channel."""
        parser = create_parser()
        assert parser.parse_args(["-c", "@bob"]).channel == "@bob"
        assert parser.parse_args(["--channel", "#ops"]).channel == "#ops"

    def test_parser_default_values(self):
        """Parser should have correct defaults."""
        parser = create_parser()
        args = parser.parse_args([])
        assert args.text == []
        assert args.channel is None
        assert args.config_check is False
        assert args.log_level is None


class TestConfigureLogging:
    """Tests for logging configuration."""

    def test_configure_logging_info(self):
        """Should configure logging at INFO level."""
        configure_logging("INFO")
        import logging

        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_debug(self):
        """Should configure logging at DEBUG level."""
        configure_logging("DEBUG")
        import logging

        assert logging.getLogger().level == logging.DEBUG


class TestReadText:
    """Tests for message text input."""

    def test_joins_words(self):
        """Words should be joined with spaces."""
        assert read_text(["a", "b"]) == "a b"

    def test_reads_stdin(self, monkeypatch):
        """Text should come from stdin when no words are given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("from stdin\n"))
        assert read_text([]) == "from stdin"


class TestValidateConfig:
    """Tests for configuration validation."""

    def test_validate_config_success(self, monkeypatch):
        """Should return settings on valid config."""
        monkeypatch.setenv("ROCKETCHAT_WEBHOOK_URL", WEBHOOK_URL)

        settings = validate_config()
        assert settings is not None

    def test_validate_config_failure(self, monkeypatch, capsys):
        """Should return None on invalid config."""
        monkeypatch.delenv("ROCKETCHAT_WEBHOOK_URL", raising=False)

        settings = validate_config()
        assert settings is None

        captured = capsys.readouterr()
        assert "Configuration validation failed" in captured.err


class TestRunConfigCheck:
    """Tests for config check mode."""

    def test_config_check_prints_redacted_summary(self, monkeypatch, capsys):
        """Config check should print configuration summary without the token."""
        monkeypatch.setenv("ROCKETCHAT_WEBHOOK_URL", WEBHOOK_URL)

        settings = validate_config()
        assert settings is not None

        result = run_config_check(settings)
        assert result == EXIT_SUCCESS

        captured = capsys.readouterr()
        assert "Configuration is valid!" in captured.out
        assert "Configuration:" in captured.out
        assert "secrettoken" not in captured.out


class TestRunSend:
    """Tests for the send step."""

    @pytest.mark.asyncio
    async def test_run_send_success(self):
        """Delivered message should exit successfully."""
        client = MagicMock()
        client.send_text = AsyncMock(return_value=SendResult(success=True, status_code=200))

        assert await run_send(client, "hello") == EXIT_SUCCESS
        client.send_text.assert_awaited_once_with("hello")

    @pytest.mark.asyncio
    async def test_run_send_failure(self):
        """Failed delivery should exit with an error code."""
        client = MagicMock()
        client.send_text = AsyncMock(
            return_value=SendResult(
                success=False, status_code=500, error=ResponseStatusError(500)
            )
        )

        assert await run_send(client, "hello") == EXIT_ERROR

    @pytest.mark.asyncio
    async def test_run_send_failure_logs_error(self, caplog):
        """Failed delivery should log the error."""
        client = MagicMock()
        client.send_text = AsyncMock(
            return_value=SendResult(
                success=False, status_code=502, error=ResponseStatusError(502)
            )
        )

        with caplog.at_level("ERROR", logger="rocketchat_webhook.__main__"):
            await run_send(client, "hello")

        assert "Message was not delivered: Response error: 502" in caplog.text


class TestMain:
    """Tests for main entry point."""

    def test_main_with_config_check(self, monkeypatch):
        """Main should exit successfully with --config-check."""
        monkeypatch.setenv("ROCKETCHAT_WEBHOOK_URL", WEBHOOK_URL)

        with pytest.raises(SystemExit) as exc_info:
            main(["--config-check"])

        assert exc_info.value.code == EXIT_SUCCESS

    def test_main_with_invalid_config(self, monkeypatch):
        """Main should exit with config error on invalid config."""
        monkeypatch.delenv("ROCKETCHAT_WEBHOOK_URL", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            main(["hello"])

        assert exc_info.value.code == EXIT_CONFIG_ERROR

    @patch("rocketchat_webhook.__main__.run_send", new_callable=MagicMock)
    @patch("rocketchat_webhook.__main__.asyncio.run")
    def test_main_sends_text(self, mock_asyncio_run, mock_run_send, monkeypatch):
        """Main should send the text to the configured channel."""
        monkeypatch.setenv("ROCKETCHAT_WEBHOOK_URL", WEBHOOK_URL)
        monkeypatch.setenv("ROCKETCHAT_CHANNEL", "#ops")
        mock_asyncio_run.return_value = EXIT_SUCCESS

        with pytest.raises(SystemExit) as exc_info:
            main(["Deploy", "finished"])

        assert exc_info.value.code == EXIT_SUCCESS
        mock_asyncio_run.assert_called_once()
        client, text = mock_run_send.call_args.args
        assert client.channel == "#ops"
        assert client.webhook_url == WEBHOOK_URL
        assert text == "Deploy finished"

    @patch("rocketchat_webhook.__main__.run_send", new_callable=MagicMock)
    @patch("rocketchat_webhook.__main__.asyncio.run")
    def test_main_channel_override(self, mock_asyncio_run, mock_run_send, monkeypatch):
        """--channel should override the configured channel."""
        monkeypatch.setenv("ROCKETCHAT_WEBHOOK_URL", WEBHOOK_URL)
        mock_asyncio_run.return_value = EXIT_SUCCESS

        with pytest.raises(SystemExit):
            main(["-c", "@alice", "hi"])

        client, _ = mock_run_send.call_args.args
        assert client.channel == "@alice"

    def test_main_without_text(self, monkeypatch, capsys):
        """Main should reject an empty message with the usage exit code."""
        monkeypatch.setenv("ROCKETCHAT_WEBHOOK_URL", WEBHOOK_URL)
        monkeypatch.setattr("sys.stdin", io.StringIO(""))

        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == EXIT_CONFIG_ERROR
        assert "no message text given" in capsys.readouterr().err


class TestIntegration:
    """Integration tests for CLI invocation."""

    def test_cli_help_option(self, capsys):
        """CLI should display help with -h option."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])

        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "rocketchat-webhook" in captured.out
        assert "--config-check" in captured.out
        assert "--channel" in captured.out
        assert "--log-level" in captured.out

    def test_cli_version_option(self, capsys):
        """CLI should display version with --version option."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "0.1.0" in captured.out

    def test_cli_invalid_log_level(self, capsys):
        """CLI should reject invalid log level."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--log-level", "INVALID"])

        assert exc_info.value.code != 0
        captured = capsys.readouterr()
        assert "invalid choice" in captured.err
