"""Pairwise duplicate classification.

- PairComparator: staged short-circuiting classifier
- CompareResult / Reason: verdict types
- StringDistance / AuthorSimilarity: injected similarity capabilities
"""

from sradedupe.scoring.comparator import PairComparator
from sradedupe.scoring.models import CompareResult, Reason
from sradedupe.scoring.similarity import (
    AuthorSimilarity,
    RapidfuzzStringDistance,
    SignatureAuthorSimilarity,
    StringDistance,
)

__all__ = [
    "AuthorSimilarity",
    "CompareResult",
    "PairComparator",
    "RapidfuzzStringDistance",
    "Reason",
    "SignatureAuthorSimilarity",
    "StringDistance",
]
