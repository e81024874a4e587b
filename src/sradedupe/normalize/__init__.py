"""Field extractors for reference comparison.

Pure functions that pull a comparable value out of a raw reference field.
None of them raise on malformed input; absence or ambiguity yields None.
"""

from sradedupe.normalize._helpers import strip_accents, title_years
from sradedupe.normalize.authors import author_signatures
from sradedupe.normalize.doi import find_doi
from sradedupe.normalize.numeric import get_numeric

__all__ = [
    "author_signatures",
    "find_doi",
    "get_numeric",
    "strip_accents",
    "title_years",
]
