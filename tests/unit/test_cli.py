"""Unit tests for command line parsing."""

import pytest

from update_client.cli import parse_options
from update_client.errors import UsageError
from update_client.models.options import DEFAULT_PAYLOAD_URI


@pytest.mark.unit
class TestParseOptions:
    """Test parse_options."""

    def test_no_arguments(self):
        options = parse_options([])

        assert options.has_action is False
        assert options.payload_uri == DEFAULT_PAYLOAD_URI
        assert options.positional == ()

    def test_update_follow_with_payload_and_headers(self):
        options = parse_options([
            "--update",
            "--follow",
            "--payload=file:///data/ota/payload.bin",
            "--headers", "FILE_SIZE=1024\n\nFILE_HASH=abc\n",
        ])

        assert options.update is True
        assert options.follow is True
        assert options.payload_uri == "file:///data/ota/payload.bin"
        assert options.headers == ("FILE_SIZE=1024", "FILE_HASH=abc")

    @pytest.mark.parametrize("flag", ["suspend", "resume", "cancel"])
    def test_single_action_flags(self, flag):
        options = parse_options([f"--{flag}"])

        assert getattr(options, flag) is True

    def test_positional_arguments_collected(self):
        """Positional arguments are kept so validation can reject them."""
        options = parse_options(["--suspend", "now"])

        assert options.positional == ("now",)

    def test_unknown_flag_raises_usage_error(self):
        """Unknown flags are usage errors, not argparse's exit 2."""
        with pytest.raises(UsageError):
            parse_options(["--reboot"])

    def test_missing_flag_value_raises_usage_error(self):
        with pytest.raises(UsageError):
            parse_options(["--payload"])

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_options(["--help"])

        assert exc_info.value.code == 0
        assert "--follow" in capsys.readouterr().out
