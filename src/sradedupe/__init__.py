"""Pairwise duplicate detection for bibliographic references.

This package provides:
- Data models (sradedupe.models) — the Reference record
- Normalization (sradedupe.normalize) — DOI, numeric and author extractors
- Scoring (sradedupe.scoring) — the staged pairwise comparator
- Engine (sradedupe.engine) — configuration, events and the all-pairs scanner
- Audit (sradedupe.audit) — structured JSONL logging
- CLI (sradedupe.cli) — command-line interface
- Public API (sradedupe.api) — high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from sradedupe.api import (
    Dedupe,
    DuplicatePair,
    ReferenceLoadError,
    find_duplicates,
    load_references,
    write_jsonl,
)
from sradedupe.engine import DedupeConfig
from sradedupe.models import Reference
from sradedupe.scoring import CompareResult, Reason

__all__ = [
    "__version__",
    "__license__",
    "CompareResult",
    "Dedupe",
    "DedupeConfig",
    "DuplicatePair",
    "Reason",
    "Reference",
    "ReferenceLoadError",
    "find_duplicates",
    "load_references",
    "write_jsonl",
]
