"""Scan orchestration — discover log files, scan them concurrently, join, report."""

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from logscan.aggregator import Aggregator, TermResult
from logscan.config import Config
from logscan.parser import MalformedDateError
from logscan.scanner import FileScanResult, scan_file

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when a scan cannot produce a meaningful report."""


@dataclass(frozen=True)
class ScanReport:
    files: list[FileScanResult] = field(default_factory=list)
    results: list[TermResult] = field(default_factory=list)
    total: int = 0
    records_seen: int = 0
    records_counted: int = 0
    elapsed_seconds: float = 0.0

    @property
    def skipped_files(self) -> list[FileScanResult]:
        return [f for f in self.files if f.status != "ok"]


def find_files(root_folder: str, log_type: str = "access") -> list[str]:
    """Return regular files directly under *root_folder* whose name contains *log_type*."""
    try:
        names = sorted(os.listdir(root_folder))
    except OSError as e:
        raise ScanError(f"Cannot read root folder {root_folder}: {e}") from e

    found = []
    for name in names:
        logger.debug("Entry: %s", name)
        if log_type not in name:
            continue
        fullpath = os.path.join(root_folder, name)
        if not os.path.isfile(fullpath):
            continue
        found.append(fullpath)

    logger.info("Found %d %r file(s) in %s", len(found), log_type, root_folder)
    return found


class _ScanWorker(threading.Thread):
    """One thread per file; keeps the result or the exception for the joiner."""

    def __init__(self, path: str, aggregator: Aggregator, config: Config) -> None:
        super().__init__(name=f"scan-{os.path.basename(path)}")
        self.path = path
        self._aggregator = aggregator
        self._config = config
        self.result: FileScanResult | None = None
        self.exception: Exception | None = None

    def run(self) -> None:
        try:
            self.result = _scan(self.path, self._aggregator, self._config)
        except Exception as e:
            self.exception = e


def _scan(path: str, aggregator: Aggregator, config: Config) -> FileScanResult:
    return scan_file(
        path,
        aggregator,
        accepted_statuses=config.accepted_statuses,
        strict_dates=config.strict_dates,
        encoding=config.encoding,
    )


def _run_unbounded(paths: list[str], aggregator: Aggregator, config: Config) -> list[FileScanResult]:
    workers = [_ScanWorker(path, aggregator, config) for path in paths]
    for w in workers:
        w.start()
    for w in workers:
        w.join()

    for w in workers:
        if w.exception is not None:
            _raise_worker_error(w.path, w.exception)
    return [w.result for w in workers]


def _run_pooled(paths: list[str], aggregator: Aggregator, config: Config) -> list[FileScanResult]:
    with ThreadPoolExecutor(max_workers=config.max_workers, thread_name_prefix="scan") as pool:
        futures = [(path, pool.submit(_scan, path, aggregator, config)) for path in paths]
    # Leaving the with-block waits for every future.
    results = []
    for path, future in futures:
        exc = future.exception()
        if exc is not None:
            _raise_worker_error(path, exc)
        results.append(future.result())
    return results


def _raise_worker_error(path: str, exc: BaseException):
    if isinstance(exc, MalformedDateError):
        raise ScanError(f"Malformed date in {path}: {exc}") from exc
    raise exc


def run_scan(config: Config) -> ScanReport:
    """Scan every matching file under ``config.root_folder`` and return the totals.

    All scanners are joined before the aggregate is read, so the report
    always reflects complete counts.
    """
    start = time.monotonic()
    aggregator = Aggregator(config.search_for, config.forwarded_from, by_date=config.by_date)
    paths = find_files(config.root_folder, config.log_type)

    if config.max_workers:
        logger.info("Scanning %d file(s) with at most %d worker(s)", len(paths), config.max_workers)
        files = _run_pooled(paths, aggregator, config)
    else:
        logger.info("Scanning %d file(s), one thread each", len(paths))
        files = _run_unbounded(paths, aggregator, config)

    results = aggregator.results()
    report = ScanReport(
        files=files,
        results=results,
        total=sum(r.total for r in results),
        records_seen=sum(f.records for f in files),
        records_counted=sum(f.counted for f in files),
        elapsed_seconds=time.monotonic() - start,
    )
    logger.info(
        "Scan finished: %d file(s), %d skipped, %d records seen, %d counted in %.2fs",
        len(report.files), len(report.skipped_files),
        report.records_seen, report.records_counted, report.elapsed_seconds,
    )
    return report
