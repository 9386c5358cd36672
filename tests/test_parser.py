"""Tests for logscan/parser.py"""

from datetime import date

import pytest

from logscan.parser import (
    MalformedDateError,
    format_date,
    parse_date,
    parse_line,
    split_at,
)


class TestSplitAt:
    def test_returns_token_at_position(self):
        assert split_at("a b c", " ", 1) == "b"

    def test_out_of_range_is_empty(self):
        assert split_at("a b c", " ", 3) == ""
        assert split_at("", " ", 1) == ""

    def test_consecutive_separators_yield_empty_tokens(self):
        assert split_at("a  b", " ", 1) == ""
        assert split_at("a  b", " ", 2) == "b"

    def test_missing_separator(self):
        assert split_at("no quotes here", '"', 0) == "no quotes here"
        assert split_at("no quotes here", '"', 1) == ""


class TestParseLine:
    def test_valid_line(self, make_line):
        record = parse_line(make_line(forwarded="203.0.113.9"))
        assert record is not None
        assert record.request_line == "GET /api/users HTTP/1.1"
        assert record.path == "/api/users"
        assert record.client_address == "10.0.0.1"
        assert record.forwarded_for == "203.0.113.9"
        assert record.date == date(2023, 10, 10)
        assert record.status_code == "200"

    def test_non_200_skipped(self, make_line):
        assert parse_line(make_line(status="404")) is None
        assert parse_line(make_line(status="304")) is None

    def test_accepted_statuses_configurable(self, make_line):
        record = parse_line(make_line(status="304"), accepted_statuses=("200", "304"))
        assert record is not None
        assert record.status_code == "304"

    @pytest.mark.parametrize("line", ["", "\n", "\r\n"])
    def test_empty_lines_skipped(self, line):
        assert parse_line(line) is None

    def test_short_garbage_line_skipped(self):
        assert parse_line("hello world") is None

    def test_line_without_request_has_empty_path(self):
        line = "1.1.1.1 - - [10/Oct/2023:10:00:00 +0000] a b c 200 0 -"
        record = parse_line(line)
        assert record is not None
        assert record.request_line == ""
        assert record.path == ""

    def test_bad_date_skips_line(self, make_line):
        assert parse_line(make_line(day="99/Foo/2023")) is None

    def test_impossible_date_skips_line(self, make_line):
        assert parse_line(make_line(day="31/Feb/2023")) is None

    def test_short_date_skips_line(self):
        line = '1.1.1.1 - - - "GET / HTTP/1.1" x 200 0 - [1/Oct'
        assert parse_line(line) is None

    def test_missing_bracket_skips_line(self):
        line = '1.1.1.1 - - - "GET /api HTTP/1.1" x 200 0 -'
        assert parse_line(line) is None

    def test_strict_dates_raise(self, make_line):
        with pytest.raises(MalformedDateError):
            parse_line(make_line(day="99/Foo/2023"), strict_dates=True)

    def test_strict_dates_ignore_non_200(self, make_line):
        # The status filter runs before the timestamp is looked at.
        assert parse_line(make_line(status="500", day="xx"), strict_dates=True) is None


class TestDates:
    def test_parse_date(self):
        assert parse_date("05/Jan/2024") == date(2024, 1, 5)

    def test_month_is_case_insensitive(self):
        assert parse_date("05/jan/2024") == date(2024, 1, 5)

    def test_single_digit_day_rejected(self):
        with pytest.raises(ValueError):
            parse_date("5/Jan/2024:")

    def test_format_date(self):
        assert format_date(date(2023, 10, 5)) == "05/Oct/2023"
