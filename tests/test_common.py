"""Tests for common utilities."""

import json

import pytest
from shortly.common.logging_config import bind_client_state, get_logger, setup_logging
from shortly.common.validators import check_source_url, check_token, is_blank
from shortly.common.url_builder import (
    build_short_url,
    build_history_url,
    build_redirect_url,
    encode_history_key,
)
from shortly.models import Principal, VerificationToken
from shortly.state import ClientState


class TestValidators:
    """Test local input checks."""

    @pytest.mark.parametrize("value", ["", " ", "\t\n", None])
    def test_blank_urls_rejected(self, value):
        """Test empty and whitespace-only input is refused."""
        valid, error = check_source_url(value)
        assert not valid
        assert error == "Please enter a valid URL."
        assert is_blank(value)

    def test_any_non_blank_url_passes_locally(self):
        """Test URL syntax is left for the backend to judge."""
        valid, error = check_source_url("not-a-url")
        assert valid
        assert error == ""

    def test_token_checks(self):
        """Test missing, consumed and empty tokens fail."""
        valid, error = check_token(None)
        assert not valid
        assert error == "Please complete the CAPTCHA."

        used = VerificationToken("abc", consumed=True)
        valid, _ = check_token(used)
        assert not valid

        valid, _ = check_token(VerificationToken(""))
        assert not valid

        valid, _ = check_token(VerificationToken("abc"))
        assert valid


class TestURLBuilder:
    """Test URL composition."""

    def test_short_url_joins_with_single_slash(self):
        """Test the fragment and base never produce a double slash."""
        assert build_short_url("/abc123", "https://s.ly/") == "https://s.ly/abc123"
        assert build_short_url("abc123", "https://s.ly") == "https://s.ly/abc123"
        assert build_short_url("/abc123", "https://s.ly") == "https://s.ly/abc123"

    def test_history_key_is_base64_of_email(self):
        """Test the history path carries the base64 email."""
        assert encode_history_key("alice@example.com") == "YWxpY2VAZXhhbXBsZS5jb20="
        assert (
            build_history_url("https://api.s.ly/user/", "alice@example.com")
            == "https://api.s.ly/user/YWxpY2VAZXhhbXBsZS5jb20="
        )

    def test_redirect_drops_leading_slash_only(self):
        """Test only the first slash of the path is removed."""
        assert build_redirect_url("https://api.s.ly/", "/abc123") == "https://api.s.ly/abc123"
        assert build_redirect_url("https://api.s.ly/", "/a/b") == "https://api.s.ly/a/b"


class TestLoggingContext:
    """Test records carry the user and epoch of the bound client state."""

    def _read(self, logger, path):
        for handler in logger.handlers:
            handler.flush()
            handler.close()
        logger.handlers.clear()
        return path.read_text().splitlines()

    def test_unbound_records_use_placeholders(self, tmp_path):
        """Test logging works before any client state is bound."""
        log_file = tmp_path / "client.log"
        logger = setup_logging(level="INFO", log_file=str(log_file))

        get_logger("startup").info("starting")

        (line,) = self._read(logger, log_file)
        assert "shortly.startup [-#-] - starting" in line

    def test_plain_format_follows_state(self, tmp_path):
        """Test the user and epoch change as the session changes."""
        log_file = tmp_path / "client.log"
        logger = setup_logging(level="INFO", log_file=str(log_file))
        state = ClientState()
        bind_client_state(get_logger("session"), state)

        logger.info("visitor")
        state.identity = Principal(email="alice@example.com")
        state.begin_epoch()
        logger.info("signed in")

        first, second = self._read(logger, log_file)
        assert "[anonymous#0]" in first
        assert "[alice@example.com#1]" in second

    def test_json_format_includes_context(self, tmp_path):
        """Test JSON lines expose user and epoch as fields."""
        log_file = tmp_path / "client.log"
        logger = setup_logging(level="INFO", log_file=str(log_file), json_format=True)
        state = ClientState()
        state.identity = Principal(email="alice@example.com")
        bind_client_state(logger, state)

        logger.warning("history failed")

        (line,) = self._read(logger, log_file)
        record = json.loads(line)
        assert record["user"] == "alice@example.com"
        assert record["epoch"] == "0"
        assert record["level"] == "WARNING"
        assert record["message"] == "history failed"
