"""Streams one log file through the parser into the shared aggregator."""

import logging
import os
from dataclasses import dataclass

from logscan.aggregator import Aggregator
from logscan.parser import DEFAULT_STATUSES, parse_line

logger = logging.getLogger(__name__)

COMPRESSED_EXTENSIONS = (".gz",)

STATUS_OK = "ok"
STATUS_SKIPPED = "skipped"
STATUS_ERROR = "error"
STATUS_TRUNCATED = "truncated"


@dataclass
class FileScanResult:
    path: str
    status: str = STATUS_OK
    lines_read: int = 0
    records: int = 0   # parsed records handed to the aggregator
    counted: int = 0   # records that hit at least one search term
    error: str | None = None


def is_compressed(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in COMPRESSED_EXTENSIONS


def scan_file(
    path: str,
    aggregator: Aggregator,
    accepted_statuses=DEFAULT_STATUSES,
    strict_dates: bool = False,
    encoding: str = "utf-8",
) -> FileScanResult:
    """Feed every countable line of *path* into *aggregator*.

    Unreadable and compressed files are logged and reported, never raised.
    Lines are read as bytes and decoded one at a time, so the first line
    that fails to decode stops this file and everything before it stays
    counted.
    """
    result = FileScanResult(path=path)

    if is_compressed(path):
        logger.warning("Found compressed file %s - please unzip files.", path)
        result.status = STATUS_SKIPPED
        result.error = "compressed file not supported"
        return result

    try:
        f = open(path, "rb")
    except OSError as e:
        logger.error("Cannot open %s: %s", path, e)
        result.status = STATUS_ERROR
        result.error = str(e)
        return result

    logger.info("Scanning %s", path)
    with f:
        try:
            for raw in f:
                line = raw.decode(encoding)
                result.lines_read += 1
                record = parse_line(line, accepted_statuses, strict_dates)
                if record is None:
                    continue
                result.records += 1
                if aggregator.record_match(record):
                    result.counted += 1
        except (UnicodeDecodeError, OSError) as e:
            logger.error("Stopped reading %s after %d lines: %s", path, result.lines_read, e)
            result.status = STATUS_TRUNCATED
            result.error = str(e)
            return result

    logger.debug("Finished %s: %d lines, %d records", path, result.lines_read, result.records)
    return result
