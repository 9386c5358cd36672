"""Tests for logscan/formatter.py"""

import json
from datetime import date

from logscan.aggregator import TermResult
from logscan.formatter import format_json, format_text, get_formatter
from logscan.orchestrator import ScanReport
from logscan.scanner import FileScanResult


def _report() -> ScanReport:
    results = [
        TermResult("/api", [(date(2023, 10, 9), 3), (date(2023, 10, 10), 1)]),
        TermResult("/login", [(date(2023, 10, 10), 2)]),
    ]
    return ScanReport(
        files=[
            FileScanResult("/logs/access.log", records=6),
            FileScanResult("/logs/access.log.1.gz", status="skipped", error="compressed file not supported"),
        ],
        results=results,
        total=6,
    )


def test_format_text():
    assert format_text(_report()).split("\n") == [
        "/api: [09/Oct/2023] 3",
        "/api: [10/Oct/2023] 1",
        "/login: [10/Oct/2023] 2",
        "Total: 6",
    ]


def test_format_text_empty():
    assert format_text(ScanReport()) == "Total: 0"


def test_format_text_undated():
    report = ScanReport(results=[TermResult("/api", [(None, 4)])], total=4)
    assert format_text(report) == "/api: 4\nTotal: 4"


def test_format_json():
    data = json.loads(format_json(_report()))
    assert data["total"] == 6
    assert data["terms"]["/api"] == [
        {"date": "09/Oct/2023", "count": 3},
        {"date": "10/Oct/2023", "count": 1},
    ]
    assert data["files"][1]["status"] == "skipped"


def test_get_formatter():
    assert get_formatter("json") is format_json
    assert get_formatter("text") is format_text
    assert get_formatter() is format_text
