"""Unit tests for config validators."""

import pytest

from trendpress.config.validators import normalize_string_list


class TestNormalizeStringList:
    """Tests for normalize_string_list function."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, []),
            ("", []),
            ("Zum, NATE ,,signal", ["zum", "nate", "signal"]),
            (["AI", "  ", "Tech "], ["ai", "tech"]),
            (("A", "B"), ["a", "b"]),
            (["ok", 3, None], ["ok"]),
            (42, []),
        ],
    )
    def test_normalize(self, value, expected):
        """Test every accepted input shape."""
        assert normalize_string_list(value) == expected
