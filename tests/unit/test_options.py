"""Unit tests for OptionSet."""

import pytest
from pydantic import ValidationError

from update_client.models.options import DEFAULT_PAYLOAD_URI, OptionSet


@pytest.mark.unit
class TestOptionSet:
    """Test OptionSet parsing and immutability."""

    def test_defaults(self):
        options = OptionSet()

        assert options.payload_uri == DEFAULT_PAYLOAD_URI
        assert options.headers == ()
        assert options.has_action is False

    def test_headers_split_discards_empty_lines(self):
        """Empty lines are dropped, order is kept."""
        options = OptionSet(headers="a: 1\n\nb: 2\n")

        assert options.headers == ("a: 1", "b: 2")

    def test_headers_keep_whitespace(self):
        """Whitespace inside a line is not stripped."""
        options = OptionSet(headers=" key: value \n")

        assert options.headers == (" key: value ",)

    def test_headers_from_sequence(self):
        options = OptionSet(headers=["a: 1", "b: 2"])

        assert options.headers == ("a: 1", "b: 2")

    @pytest.mark.parametrize("flag", ["suspend", "resume", "cancel", "update", "follow"])
    def test_has_action(self, flag):
        assert OptionSet(**{flag: True}).has_action is True

    def test_frozen(self):
        """The option set is never mutated after construction."""
        options = OptionSet(update=True)

        with pytest.raises(ValidationError):
            options.update = False
