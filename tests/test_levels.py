"""Tests for dotlog.levels — SeverityLevel ordering and parsing."""

import pytest

from dotlog.levels import (
    DEBUG, DEFAULT_THRESHOLD, ERROR, FATAL, INFO, INFORMATION, TRACE, WARNING,
    SeverityLevel,
)


class TestOrdering:
    """The six levels form one ascending axis."""

    def test_ascending_order(self):
        assert TRACE < DEBUG < INFORMATION < WARNING < ERROR < FATAL

    def test_integer_values(self):
        assert [int(level) for level in SeverityLevel] == [1, 2, 3, 4, 5, 6]

    def test_info_is_alias(self):
        """INFO names the same member as INFORMATION."""
        assert SeverityLevel.INFO is SeverityLevel.INFORMATION
        assert INFO is INFORMATION
        assert len(list(SeverityLevel)) == 6

    def test_default_threshold(self):
        assert DEFAULT_THRESHOLD is INFORMATION


class TestParse:
    """SeverityLevel.parse() accepts members, ints and names."""

    def test_member_passes_through(self):
        assert SeverityLevel.parse(WARNING) is WARNING

    def test_int(self):
        assert SeverityLevel.parse(5) is ERROR

    def test_digit_string(self):
        assert SeverityLevel.parse(" 2 ") is DEBUG

    @pytest.mark.parametrize("name,expected", [
        ("trace", TRACE),
        ("DEBUG", DEBUG),
        ("Info", INFORMATION),
        ("information", INFORMATION),
        ("warn", WARNING),
        ("warning", WARNING),
        ("err", ERROR),
        ("fatal", FATAL),
        ("critical", FATAL),
    ])
    def test_names(self, name, expected):
        assert SeverityLevel.parse(name) is expected

    @pytest.mark.parametrize("value", [0, 7, -1, "loud", "", None, 2.5, True])
    def test_rejects_non_levels(self, value):
        with pytest.raises(ValueError):
            SeverityLevel.parse(value)
