"""Public API for duplicate detection.

This module provides the main public API for sradedupe, enabling:
- Comparing two references (``Dedupe.compare``)
- Scanning a collection for duplicate pairs with event notifications
- Loading references from and writing duplicate pairs to JSONL
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sradedupe.audit.logger import AuditLogger
from sradedupe.engine.config import DedupeConfig
from sradedupe.engine.events import EventEmitter
from sradedupe.engine.scanner import DuplicateHook, FetchRef, PairScanner, ScanStats
from sradedupe.models.records import Reference
from sradedupe.scoring.comparator import PairComparator
from sradedupe.scoring.models import CompareResult
from sradedupe.scoring.similarity import AuthorSimilarity, StringDistance

__all__ = [
    "Dedupe",
    "DuplicatePair",
    "ReferenceLoadError",
    "find_duplicates",
    "load_references",
    "write_jsonl",
]


class ReferenceLoadError(Exception):
    """Raised when a reference file cannot be read."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        """Initialize load error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        line : int | None, optional
            1-based line number where error occurred.
        """
        super().__init__(message)
        self.file = file
        self.line = line


@dataclass(frozen=True)
class DuplicatePair:
    """A pair of references judged to be duplicates.

    Attributes
    ----------
    index_a : int
        Position of the first reference in the scanned collection.
    index_b : int
        Position of the second reference (always greater than index_a).
    ref_a : Reference
        First reference, as resolved by the fetch hook.
    ref_b : Reference
        Second reference.
    result : CompareResult
        The duplicate verdict.
    """

    index_a: int
    index_b: int
    ref_a: Reference
    ref_b: Reference
    result: CompareResult

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary for JSONL output."""
        return {
            "index_a": self.index_a,
            "index_b": self.index_b,
            "rid_a": self.ref_a.rid,
            "rid_b": self.ref_b.rid,
            "title_a": self.ref_a.title,
            "title_b": self.ref_b.title,
            "reason": str(self.result.reason),
        }


class Dedupe(EventEmitter):
    """Duplicate detector for bibliographic references.

    Subscribe to ``progress``, ``dupe``, ``error`` and ``end`` with
    :meth:`on`, then call :meth:`scan_all` (or :meth:`ascan_all` for
    async fetch hooks).

    Parameters
    ----------
    config : DedupeConfig | Mapping[str, Any] | None, optional
        Settings, or a partial mapping merged over the defaults.
    string_distance : StringDistance | None, optional
        Title similarity scorer.
    author_similarity : AuthorSimilarity | None, optional
        Author-list judge.
    fetch_ref : FetchRef | None, optional
        Hook resolving each collection item into a ``Reference``.
        Subclasses may override :meth:`fetch_ref` instead.
    logger : AuditLogger | None, optional
        Audit logger for scan events.

    Examples
    --------
    Collect duplicates from a list of references:

        >>> dupes = []
        >>> dedupe = Dedupe().on("dupe", lambda a, b, result: dupes.append((a, b)))
        >>> dedupe.scan_all(references)
    """

    def __init__(
        self,
        config: DedupeConfig | Mapping[str, Any] | None = None,
        *,
        string_distance: StringDistance | None = None,
        author_similarity: AuthorSimilarity | None = None,
        fetch_ref: FetchRef | None = None,
        logger: AuditLogger | None = None,
    ) -> None:
        super().__init__()
        if not isinstance(config, DedupeConfig):
            config = DedupeConfig.from_dict(config)

        self.config = config
        self.comparator = PairComparator(config, string_distance, author_similarity)
        self.logger = logger
        self.last_stats: ScanStats | None = None
        self._fetch_ref = fetch_ref

    def find_doi(self, ref: Reference) -> str | None:
        """Extract a DOI from the ``doi`` field or a single DOI-bearing URL."""
        return self.comparator.find_doi(ref)

    def get_numeric(self, value: object) -> int | float | None:
        """Return the numeric version of *value*, or None if it is not numeric."""
        return self.comparator.get_numeric(value)

    def compare(self, ref_a: Reference, ref_b: Reference) -> CompareResult:
        """Decide whether two references are duplicates."""
        return self.comparator.compare(ref_a, ref_b)

    def fetch_ref(self, ref: Any) -> Any:
        """Resolve a collection item into a full reference.

        Uses the hook given at construction; otherwise passes *ref*
        through unchanged. Override to hydrate references from storage.
        """
        if self._fetch_ref is not None:
            return self._fetch_ref(ref)
        return ref

    def scan_all(self, refs: Iterable[Any]) -> Dedupe:
        """Compare every unordered pair of *refs*, emitting events as it goes.

        Returns
        -------
        Dedupe
            Self, for chaining.
        """
        self.last_stats = self._scanner().scan(refs)
        return self

    async def ascan_all(self, refs: Iterable[Any]) -> Dedupe:
        """Async variant of :meth:`scan_all` for awaitable fetch hooks."""
        self.last_stats = await self._scanner().ascan(refs)
        return self

    def _scanner(self, on_duplicate: DuplicateHook | None = None) -> PairScanner:
        return PairScanner(
            compare=self.comparator.compare,
            emitter=self,
            fetch_ref=self.fetch_ref,
            logger=self.logger,
            on_duplicate=on_duplicate,
        )


def find_duplicates(
    references: Iterable[Reference],
    *,
    config: DedupeConfig | Mapping[str, Any] | None = None,
    logger: AuditLogger | None = None,
) -> list[DuplicatePair]:
    """Scan *references* and collect every duplicate pair.

    Parameters
    ----------
    references : Iterable[Reference]
        References to scan.
    config : DedupeConfig | Mapping[str, Any] | None, optional
        Settings or a partial settings mapping.
    logger : AuditLogger | None, optional
        Audit logger for scan events.

    Returns
    -------
    list[DuplicatePair]
        Duplicate pairs in pair-enumeration order.

    Raises
    ------
    Exception
        Any fault raised during the scan.
    """
    found: list[DuplicatePair] = []

    def collect(
        i: int, j: int, ref_a: Reference, ref_b: Reference, result: CompareResult
    ) -> None:
        found.append(DuplicatePair(i, j, ref_a, ref_b, result))

    dedupe = Dedupe(config, logger=logger)
    dedupe.last_stats = dedupe._scanner(on_duplicate=collect).scan(references)
    return found


def load_references(path: str | Path) -> list[Reference]:
    """Read references from a JSONL file (one JSON object per line).

    Blank lines are skipped.

    Parameters
    ----------
    path : str | Path
        Path to JSONL file.

    Returns
    -------
    list[Reference]
        References in file order.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    ReferenceLoadError
        If a line is not a JSON object.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    references: list[Reference] = []
    with file_path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise ReferenceLoadError(
                    f"Invalid JSON in {file_path.name} line {line_no}: {e.msg}",
                    file=str(file_path),
                    line=line_no,
                ) from e
            if not isinstance(data, dict):
                raise ReferenceLoadError(
                    f"Expected a JSON object in {file_path.name} line {line_no}",
                    file=str(file_path),
                    line=line_no,
                )
            references.append(Reference.from_dict(data))

    return references


def write_jsonl(
    pairs: Iterable[DuplicatePair],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> int:
    """Write duplicate pairs to a JSONL file.

    Output is deterministic with consistent field ordering and UTF-8 encoding.

    Parameters
    ----------
    pairs : Iterable[DuplicatePair]
        Pairs to write.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort dictionary keys, by default True.

    Returns
    -------
    int
        Number of pairs written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for pair in pairs:
            json_str = json.dumps(pair.to_dict(), ensure_ascii=False, sort_keys=sort_keys)
            f.write(json_str + "\n")
            count += 1
    return count
