"""Report formatters — text lines per date bucket, or JSON."""

import json
from typing import Callable

from logscan.orchestrator import ScanReport
from logscan.parser import format_date


def format_text(report: ScanReport) -> str:
    """``<term>: [<dd/Mon/YYYY>] <count>`` per bucket, then the grand total."""
    lines = []
    for result in report.results:
        for bucket, count in result.buckets:
            if bucket is None:
                lines.append(f"{result.term}: {count}")
            else:
                lines.append(f"{result.term}: [{format_date(bucket)}] {count}")
    lines.append(f"Total: {report.total}")
    return "\n".join(lines)


def format_json(report: ScanReport) -> str:
    return json.dumps({
        "terms": {
            result.term: [
                {"date": format_date(bucket) if bucket else None, "count": count}
                for bucket, count in result.buckets
            ]
            for result in report.results
        },
        "total": report.total,
        "files": [
            {"path": f.path, "status": f.status, "records": f.records, "error": f.error}
            for f in report.files
        ],
    }, indent=2)


def get_formatter(output_format: str = "text") -> Callable[[ScanReport], str]:
    """Factory that returns the formatter for the configured output."""
    if output_format == "json":
        return format_json
    return format_text
