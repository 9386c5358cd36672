"""Thread-safe per-term counters, optionally bucketed by request date."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date

from logscan.parser import RequestRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TermResult:
    term: str
    buckets: list[tuple[date | None, int]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(count for _, count in self.buckets)


class SearchCounter:
    """Counts hits for a single search term. Each instance has its own lock."""

    def __init__(self, term: str) -> None:
        self.term = term
        self._lock = threading.Lock()
        self._date_count: dict[date | None, int] = {}

    def incr(self, bucket: date | None) -> None:
        with self._lock:
            self._date_count[bucket] = self._date_count.get(bucket, 0) + 1

    def buckets(self) -> list[tuple[date | None, int]]:
        """Return (date, count) pairs, oldest first. The undated bucket sorts first."""
        with self._lock:
            items = list(self._date_count.items())
        return sorted(items, key=lambda item: (item[0] is not None, item[0] or date.min))

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self._date_count.values())


class Aggregator:
    """Shared counting structure for one scan run.

    ``record_match`` may be called from any number of scanner threads.
    Counters are created lazily under a registry lock; increments only
    take the lock of the term being counted.
    """

    def __init__(self, search_terms, forwarded_from: str = "", by_date: bool = True) -> None:
        terms: list[str] = []
        for term in search_terms:
            if term and term not in terms:
                terms.append(term)
        self._search_for = tuple(terms)
        self._forwarded_from = forwarded_from or ""
        self._by_date = by_date
        self._registry_lock = threading.Lock()
        self._found: dict[str, SearchCounter] = {}

    @property
    def search_terms(self) -> tuple[str, ...]:
        return self._search_for

    @property
    def forwarded_from(self) -> str:
        return self._forwarded_from

    def _counter_for(self, term: str) -> SearchCounter:
        counter = self._found.get(term)
        if counter is not None:
            return counter
        with self._registry_lock:
            counter = self._found.get(term)
            if counter is None:
                counter = SearchCounter(term)
                self._found[term] = counter
                logger.debug("First match for search term %r", term)
            return counter

    def record_match(self, record: RequestRecord) -> int:
        """Count *record* against every matching term. Returns the number of terms hit."""
        if self._forwarded_from and self._forwarded_from not in record.forwarded_for:
            return 0
        hits = 0
        bucket = record.date if self._by_date else None
        for term in self._search_for:
            if term in record.path:
                self._counter_for(term).incr(bucket)
                hits += 1
        return hits

    def results(self) -> list[TermResult]:
        """Per-term buckets in search-term order. Terms without a hit are left out."""
        results = []
        for term in self._search_for:
            counter = self._found.get(term)
            if counter is None:
                continue
            results.append(TermResult(term=term, buckets=counter.buckets()))
        return results

    def total_count(self) -> int:
        return sum(result.total for result in self.results())
