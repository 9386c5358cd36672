"""Positional access-log line parser — column indices, not a grammar."""

import logging
import re
from dataclasses import dataclass
from datetime import date

logger = logging.getLogger(__name__)

DEFAULT_STATUSES = ("200",)

# Column positions in a space-split access-log line
CLIENT_COLUMN = 0
STATUS_COLUMN = 8
FORWARDED_COLUMN = 10

DATE_WIDTH = 11  # "10/Oct/2023"
DATE_PATTERN = re.compile(r"^(\d{2})/([A-Za-z]{3})/(\d{4})$")

# Fixed English abbreviations; strptime's %b follows the process locale.
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_LOOKUP = {name.lower(): i for i, name in enumerate(MONTHS, start=1)}


class MalformedDateError(ValueError):
    """Raised in strict mode when a 200 line has no usable timestamp."""


@dataclass(frozen=True)
class RequestRecord:
    request_line: str
    path: str
    client_address: str
    forwarded_for: str
    date: date
    status_code: str


def split_at(text: str, sep: str, position: int) -> str:
    """Return the token at *position* of ``text.split(sep)``, or "" if out of range."""
    parts = text.split(sep)
    if position >= len(parts):
        return ""
    return parts[position]


def parse_date(value: str) -> date:
    """Parse ``dd/Mon/YYYY`` into a date. Raises ValueError on anything else."""
    match = DATE_PATTERN.match(value)
    if not match:
        raise ValueError(f"not a dd/Mon/YYYY date: {value!r}")
    day, month_name, year = match.groups()
    month = _MONTH_LOOKUP.get(month_name.lower())
    if month is None:
        raise ValueError(f"unknown month abbreviation: {month_name!r}")
    return date(int(year), month, int(day))


def format_date(value: date) -> str:
    """Render a date back into the access-log ``dd/Mon/YYYY`` form."""
    return f"{value.day:02d}/{MONTHS[value.month - 1]}/{value.year:04d}"


def parse_line(
    line: str,
    accepted_statuses=DEFAULT_STATUSES,
    strict_dates: bool = False,
) -> RequestRecord | None:
    """Parse one access-log line. Returns None for lines that should not be counted.

    Fields are picked by position; a missing column yields "" rather than
    an error, so short or garbled lines simply fail the status check.
    """
    line = line.rstrip("\r\n")
    if not line:
        return None

    request_line = split_at(line, '"', 1)
    path = split_at(request_line, " ", 1)
    client_address = split_at(line, " ", CLIENT_COLUMN)
    status_code = split_at(line, " ", STATUS_COLUMN)
    forwarded_for = split_at(line, " ", FORWARDED_COLUMN)

    if status_code not in accepted_statuses:
        return None

    date_string = split_at(line, "[", 1)[:DATE_WIDTH]
    try:
        if len(date_string) < DATE_WIDTH:
            raise ValueError(f"timestamp too short: {date_string!r}")
        request_date = parse_date(date_string)
    except ValueError as e:
        if strict_dates:
            raise MalformedDateError(f"{e} in line: {line!r}") from e
        logger.debug("Skipping line with bad timestamp (%s): %r", e, line)
        return None

    return RequestRecord(
        request_line=request_line,
        path=path,
        client_address=client_address,
        forwarded_for=forwarded_for,
        date=request_date,
        status_code=status_code,
    )
