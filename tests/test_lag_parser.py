# ============================================================================
# DATA GUARD LAG PARSER TESTS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Tests - Interval literal parsing
# PURPOSE: Verify parse_lag on V$DATAGUARD_STATS values
# CREATED: 18 OCT 2026
# ============================================================================
"""
Lag Parser Tests

Covers:
- Empty / zero intervals
- Day, hour, minute and second components
- Malformed literals raise LagFormatError

Run with:
    pytest tests/test_lag_parser.py -v
"""

import pytest

from core.errors import LagFormatError, ProbeError
from infrastructure.dataguard import ZERO_LAG, parse_lag


class TestParseLag:

    def test_empty_is_zero(self):
        """No value means no lag."""
        assert parse_lag("") == 0
        assert parse_lag(None) == 0

    def test_whitespace_only_is_zero(self):
        assert parse_lag("   ") == 0

    def test_zero_literal(self):
        assert parse_lag(ZERO_LAG) == 0
        assert parse_lag("+00 00:00:00") == 0

    def test_all_components(self):
        """+01 02:03:04 is one day, two hours, three minutes, four seconds."""
        assert parse_lag("+01 02:03:04") == 86400 + 2 * 3600 + 3 * 60 + 4

    def test_seconds_only(self):
        assert parse_lag("+00 00:00:07") == 7

    def test_multi_day(self):
        assert parse_lag("+12 00:00:00") == 12 * 86400

    def test_surrounding_whitespace(self):
        assert parse_lag("  +00 00:01:00\n") == 60


class TestParseLagErrors:

    def test_missing_plus(self):
        with pytest.raises(LagFormatError):
            parse_lag("00 00:00:05")

    def test_missing_seconds(self):
        with pytest.raises(LagFormatError):
            parse_lag("+00 00:05")

    def test_missing_time_part(self):
        with pytest.raises(LagFormatError):
            parse_lag("+00")

    def test_non_numeric_component(self):
        with pytest.raises(LagFormatError) as exc_info:
            parse_lag("+00 00:xx:05")
        assert exc_info.value.fragment == "xx"

    def test_negative_component_rejected(self):
        with pytest.raises(LagFormatError):
            parse_lag("+00 00:-1:05")

    def test_is_probe_error(self):
        """Callers can catch the common base class."""
        with pytest.raises(ProbeError):
            parse_lag("garbage")
