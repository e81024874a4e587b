"""Text-similarity capabilities consumed by the comparator.

The comparator only decides *whether* two records are the same work; how
close two strings or two author lists are is delegated to the narrow
protocols below so any qualifying algorithm can be plugged in.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from rapidfuzz.distance import JaroWinkler, Levenshtein

from sradedupe.normalize.authors import author_signatures

__all__ = [
    "AuthorSimilarity",
    "RapidfuzzStringDistance",
    "SignatureAuthorSimilarity",
    "StringDistance",
]


@runtime_checkable
class StringDistance(Protocol):
    """String-distance scorer."""

    def similarity(self, a: str, b: str) -> float:
        """Jaro-Winkler similarity in [0, 1]."""
        ...

    def distance(self, a: str, b: str) -> int:
        """Levenshtein edit distance."""
        ...


@runtime_checkable
class AuthorSimilarity(Protocol):
    """Author-list similarity judge."""

    def matches(self, authors_a: Sequence[str], authors_b: Sequence[str]) -> bool:
        """Return True when both lists plausibly name the same authors."""
        ...


class RapidfuzzStringDistance:
    """``StringDistance`` backed by rapidfuzz."""

    def __init__(self, prefix_weight: float = 0.1) -> None:
        self.prefix_weight = prefix_weight

    def similarity(self, a: str, b: str) -> float:
        return JaroWinkler.similarity(a, b, prefix_weight=self.prefix_weight)

    def distance(self, a: str, b: str) -> int:
        return Levenshtein.distance(a, b)


class SignatureAuthorSimilarity:
    """``AuthorSimilarity`` comparing ``family|initial`` signatures.

    Two lists match when both are non-empty and every author of the shorter
    list has a compatible signature somewhere in the longer one. Signatures
    are compatible when the family names agree and the initials agree or
    one of them is unknown. Author order is ignored.

    Notes
    -----
    An empty list on either side never matches: there is nothing to
    corroborate the title match with.
    """

    def matches(self, authors_a: Sequence[str], authors_b: Sequence[str]) -> bool:
        sigs_a = [s for s in (author_signatures(str(a)) for a in authors_a) if s]
        sigs_b = [s for s in (author_signatures(str(b)) for b in authors_b) if s]

        if not sigs_a or not sigs_b:
            return False

        shorter, longer = sorted((sigs_a, sigs_b), key=len)
        return all(
            any(_compatible(name, other) for other in longer) for name in shorter
        )


def _compatible(sigs_a: frozenset[str], sigs_b: frozenset[str]) -> bool:
    for sig_a in sigs_a:
        family_a, _, initial_a = sig_a.partition("|")
        for sig_b in sigs_b:
            family_b, _, initial_b = sig_b.partition("|")
            if family_a != family_b:
                continue
            if not initial_a or not initial_b or initial_a == initial_b:
                return True
    return False
