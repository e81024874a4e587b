"""All-pairs scanning driver.

Applies the pairwise comparator to every unordered pair of a reference
collection, strictly one pair at a time, and reports progress and
duplicates through an ``EventEmitter`` as they are found.
"""

from __future__ import annotations

import inspect
import time
import traceback
from collections.abc import Awaitable, Callable, Iterable, Iterator, Sequence
from dataclasses import asdict, dataclass
from math import comb
from typing import TYPE_CHECKING, Any

from sradedupe.audit.logger import AuditLogger
from sradedupe.engine.events import EventEmitter, ScanEvent

if TYPE_CHECKING:
    from sradedupe.models.records import Reference
    from sradedupe.scoring.models import CompareResult

__all__ = [
    "DuplicateHook",
    "FetchRef",
    "PairScanner",
    "ScanStats",
    "identity_fetch",
    "iter_pairs",
    "pair_count",
]

STAGE_NAME = "pairwise_scan"

FetchRef = Callable[[Any], "Reference | Awaitable[Reference]"]
Compare = Callable[["Reference", "Reference"], "CompareResult"]
DuplicateHook = Callable[[int, int, "Reference", "Reference", "CompareResult"], None]


def identity_fetch(ref: Any) -> Any:
    """Default fetch hook: the input already is a full reference."""
    return ref


def pair_count(n: int) -> int:
    """Number of unordered pairs among *n* items."""
    return comb(n, 2) if n > 1 else 0


def iter_pairs(n: int) -> Iterator[tuple[int, int]]:
    """Lazily yield every index pair ``(i, j)`` with ``i < j < n``.

    Pairs come in lexicographic order and are never materialised as a
    list, so memory stays constant however many records are scanned.

    Examples
    --------
        >>> list(iter_pairs(3))
        [(0, 1), (0, 2), (1, 2)]
    """
    for i in range(n):
        for j in range(i + 1, n):
            yield i, j


@dataclass
class ScanStats:
    """Counters for one scan.

    Attributes
    ----------
    records : int
        References in the scanned collection.
    pairs_total : int
        Pairs the scan would visit if it ran to completion.
    pairs_compared : int
        Pairs actually compared.
    duplicates_found : int
        Pairs judged duplicates.
    failed : bool
        Whether a fault halted the scan.
    """

    records: int = 0
    pairs_total: int = 0
    pairs_compared: int = 0
    duplicates_found: int = 0
    failed: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict."""
        return asdict(self)


class PairScanner:
    """Drive a comparator over every unordered pair of references.

    Parameters
    ----------
    compare : Callable[[Reference, Reference], CompareResult]
        Pairwise classifier.
    emitter : EventEmitter
        Receives ``progress``, ``dupe``, ``error`` and ``end`` events.
    fetch_ref : FetchRef | None, optional
        Resolves each collection item into a ``Reference`` before it is
        compared (e.g. a database lookup by id). Defaults to identity.
    logger : AuditLogger | None, optional
        Audit logger for observability events.
    on_duplicate : DuplicateHook | None, optional
        Called with ``(i, j, ref_a, ref_b, result)`` for each duplicate,
        just before the ``dupe`` event, where ``i`` and ``j`` are the
        positions of the pair in the scanned collection.

    Notes
    -----
    ``fetch_ref`` is the only suspension point. The scanner waits for it
    before comparing a pair and before moving to the next one, so hooks
    backed by a single connection or a rate limit need no locking.
    """

    def __init__(
        self,
        compare: Compare,
        emitter: EventEmitter,
        fetch_ref: FetchRef | None = None,
        logger: AuditLogger | None = None,
        on_duplicate: DuplicateHook | None = None,
    ) -> None:
        self.compare = compare
        self.emitter = emitter
        self.fetch_ref = fetch_ref or identity_fetch
        self.logger = logger
        self.on_duplicate = on_duplicate

    def scan(self, records: Iterable[Any]) -> ScanStats:
        """Scan all pairs with a blocking ``fetch_ref``.

        Parameters
        ----------
        records : Iterable[Any]
            Collection items, resolved through ``fetch_ref``.

        Returns
        -------
        ScanStats
            Counters for the scan.

        Raises
        ------
        Exception
            The original fault, when nothing listens to ``error``.
        """
        items = _as_sequence(records)
        stats, start = self._begin(items)

        for index, (i, j) in enumerate(iter_pairs(len(items)), start=1):
            try:
                ref_a = self._resolve(items[i])
                ref_b = self._resolve(items[j])
                result = self.compare(ref_a, ref_b)
            except Exception as e:
                self._fail(e, stats, start)
                return stats
            self._report(index, i, j, ref_a, ref_b, result, stats)

        self._finish(stats, start)
        return stats

    async def ascan(self, records: Iterable[Any]) -> ScanStats:
        """Scan all pairs, awaiting ``fetch_ref`` when it returns an awaitable.

        Pairs are still processed strictly one at a time.

        Parameters
        ----------
        records : Iterable[Any]
            Collection items, resolved through ``fetch_ref``.

        Returns
        -------
        ScanStats
            Counters for the scan.
        """
        items = _as_sequence(records)
        stats, start = self._begin(items)

        for index, (i, j) in enumerate(iter_pairs(len(items)), start=1):
            try:
                ref_a = await self._aresolve(items[i])
                ref_b = await self._aresolve(items[j])
                result = self.compare(ref_a, ref_b)
            except Exception as e:
                self._fail(e, stats, start)
                return stats
            self._report(index, i, j, ref_a, ref_b, result, stats)

        self._finish(stats, start)
        return stats

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _resolve(self, item: Any) -> Reference:
        ref = self.fetch_ref(item)
        if inspect.isawaitable(ref):
            if inspect.iscoroutine(ref):
                ref.close()
            raise TypeError("fetch_ref returned an awaitable; use ascan() for async hooks")
        return ref

    async def _aresolve(self, item: Any) -> Reference:
        ref = self.fetch_ref(item)
        if inspect.isawaitable(ref):
            ref = await ref
        return ref

    def _begin(self, items: Sequence[Any]) -> tuple[ScanStats, float]:
        stats = ScanStats(records=len(items), pairs_total=pair_count(len(items)))
        if self.logger:
            self.logger.stage_started(STAGE_NAME, expected_records=len(items))
        return stats, time.perf_counter()

    def _report(
        self,
        index: int,
        i: int,
        j: int,
        ref_a: Reference,
        ref_b: Reference,
        result: CompareResult,
        stats: ScanStats,
    ) -> None:
        stats.pairs_compared += 1
        self.emitter.emit(ScanEvent.PROGRESS, index, stats.pairs_total)

        if not result.is_dupe:
            return

        stats.duplicates_found += 1
        if self.logger:
            self.logger.duplicate_found(
                index_a=i,
                index_b=j,
                reason=str(result.reason),
                rid_a=getattr(ref_a, "rid", None),
                rid_b=getattr(ref_b, "rid", None),
                stage=STAGE_NAME,
            )
        if self.on_duplicate:
            self.on_duplicate(i, j, ref_a, ref_b, result)
        self.emitter.emit(ScanEvent.DUPE, ref_a, ref_b, result)

    def _fail(self, exc: Exception, stats: ScanStats, start: float) -> None:
        stats.failed = True
        if self.logger:
            self.logger.error(
                exception_class=type(exc).__name__,
                message=str(exc),
                stage=STAGE_NAME,
                traceback=traceback.format_exc(),
            )
            self._log_finished(stats, start)

        if not self.emitter.emit(ScanEvent.ERROR, exc):
            raise exc

    def _finish(self, stats: ScanStats, start: float) -> None:
        if self.logger:
            self._log_finished(stats, start)
        self.emitter.emit(ScanEvent.END)

    def _log_finished(self, stats: ScanStats, start: float) -> None:
        assert self.logger is not None
        self.logger.stage_finished(
            stage=STAGE_NAME,
            duration_seconds=time.perf_counter() - start,
            counters={
                "records": stats.records,
                "pairs_total": stats.pairs_total,
                "pairs_compared": stats.pairs_compared,
                "duplicates_found": stats.duplicates_found,
            },
        )


def _as_sequence(records: Iterable[Any]) -> Sequence[Any]:
    if isinstance(records, Sequence):
        return records
    return list(records)
