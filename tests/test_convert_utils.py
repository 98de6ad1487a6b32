"""
Tests for formatting and parsing helpers used by the CLI.
"""
import re

from dupescope.utils.convert_utils import ConvertUtils


class TestSecondsToHuman:
    """Durations are shown as h,mm,ss."""

    def test_zero(self):
        assert ConvertUtils.seconds_to_human(0) == "0h,00m,00s"

    def test_minutes_and_seconds_are_padded(self):
        assert ConvertUtils.seconds_to_human(65) == "0h,01m,05s"

    def test_hours(self):
        assert ConvertUtils.seconds_to_human(3 * 3600 + 7 * 60 + 9) == "3h,07m,09s"

    def test_fractions_are_truncated(self):
        assert ConvertUtils.seconds_to_human(5.9) == "0h,00m,05s"

    def test_negative_is_clamped(self):
        assert ConvertUtils.seconds_to_human(-5) == "0h,00m,00s"


class TestParseSelection:
    """Comma separated 1-based directory selection."""

    def test_valid_indices(self):
        assert ConvertUtils.parse_selection("1,3,4", 4) == ([1, 3, 4], [])

    def test_spaces_and_empty_tokens_are_ignored(self):
        assert ConvertUtils.parse_selection(" 2 , ,1 ", 3) == ([2, 1], [])

    def test_invalid_tokens_are_rejected(self):
        assert ConvertUtils.parse_selection("1,abc,2", 2) == ([1, 2], ["abc"])

    def test_out_of_range_is_rejected(self):
        assert ConvertUtils.parse_selection("0,1,5", 2) == ([1], ["0", "5"])

    def test_repeats_are_dropped(self):
        assert ConvertUtils.parse_selection("2,2,1", 2) == ([2, 1], [])

    def test_empty_input(self):
        assert ConvertUtils.parse_selection("", 3) == ([], [])


class TestTimestampAndEstimate:
    def test_timestamp_format(self):
        assert re.fullmatch(r"\d{14}", ConvertUtils.timestamp_to_human())

    def test_estimate_scales_linearly(self):
        assert ConvertUtils.estimate_total_seconds(10.0, 25, 100) == 40.0

    def test_estimate_before_first_file(self):
        assert ConvertUtils.estimate_total_seconds(3.0, 0, 100) == 0.0
