"""Scan orchestration engine.

This package provides the configuration, the observer surface and the
all-pairs scanning driver.
"""

from sradedupe.engine.config import DedupeConfig, Regexps, StringDistances
from sradedupe.engine.events import EventEmitter, ScanEvent
from sradedupe.engine.scanner import (
    PairScanner,
    ScanStats,
    identity_fetch,
    iter_pairs,
    pair_count,
)

__all__ = [
    "DedupeConfig",
    "EventEmitter",
    "PairScanner",
    "Regexps",
    "ScanEvent",
    "ScanStats",
    "StringDistances",
    "identity_fetch",
    "iter_pairs",
    "pair_count",
]
