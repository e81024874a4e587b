"""Staged pairwise duplicate classifier.

The comparator runs an ordered sequence of short-circuiting stages over a
pair of references. Each stage either returns a verdict or passes; the
first verdict wins. Cheap, highly discriminating identifier checks run
before the expensive fuzzy title comparison.

Stages
------
1. Title presence
2. Exact-field sanity (year, pages, volume, number, isbn)
3. DOI decisive match
4. Embedded-year consistency
5. ISBN decisive match
6. Fuzzy title + author match
"""

from __future__ import annotations

from collections.abc import Callable

from sradedupe.engine.config import DedupeConfig
from sradedupe.models.records import NUMERIC_FIELDS, Reference
from sradedupe.normalize import find_doi, get_numeric, title_years
from sradedupe.scoring.models import CompareResult, Reason
from sradedupe.scoring.similarity import (
    AuthorSimilarity,
    RapidfuzzStringDistance,
    SignatureAuthorSimilarity,
    StringDistance,
)

__all__ = ["PairComparator"]

Stage = Callable[[Reference, Reference], CompareResult | None]

_NOT_DUPE_MISSING_TITLE = CompareResult(is_dupe=False, reason=Reason.MISSING_TITLE)
_NOT_DUPE_EXHAUSTED = CompareResult(is_dupe=False, reason=Reason.EXHAUSTED)


class PairComparator:
    """Decide whether two references describe the same published work.

    The verdict is a pure function of the two references and the
    configuration; no state is kept between calls.

    Parameters
    ----------
    config : DedupeConfig | None, optional
        Patterns and thresholds. Defaults to ``DedupeConfig()``.
    string_distance : StringDistance | None, optional
        Title similarity scorer. Defaults to rapidfuzz.
    author_similarity : AuthorSimilarity | None, optional
        Author-list judge. Defaults to signature matching.

    Examples
    --------
        >>> comparator = PairComparator()
        >>> a = Reference(title="A Study of X", doi="10.1000/xyz123")
        >>> b = Reference(title="Completely Different", doi="10.1000/xyz123")
        >>> comparator.compare(a, b)
        CompareResult(is_dupe=True, reason=<Reason.DOI: 'doi'>)
    """

    def __init__(
        self,
        config: DedupeConfig | None = None,
        string_distance: StringDistance | None = None,
        author_similarity: AuthorSimilarity | None = None,
    ) -> None:
        self.config = config if config is not None else DedupeConfig()
        self.string_distance = string_distance or RapidfuzzStringDistance()
        self.author_similarity = author_similarity or SignatureAuthorSimilarity()

        self._stages: tuple[Stage, ...] = (
            self._check_titles_present,
            self._check_exact_fields,
            self._check_doi,
            self._check_title_years,
            self._check_isbn,
            self._check_title_and_authors,
        )

    def __call__(self, ref_a: Reference, ref_b: Reference) -> CompareResult:
        return self.compare(ref_a, ref_b)

    def compare(self, ref_a: Reference, ref_b: Reference) -> CompareResult:
        """Classify a pair of references.

        Parameters
        ----------
        ref_a : Reference
            First reference.
        ref_b : Reference
            Second reference.

        Returns
        -------
        CompareResult
            Verdict from the first deciding stage, or a non-duplicate
            verdict with reason ``exhausted``.
        """
        for stage in self._stages:
            result = stage(ref_a, ref_b)
            if result is not None:
                return result
        return _NOT_DUPE_EXHAUSTED

    def find_doi(self, ref: Reference) -> str | None:
        """Extract a DOI using the configured pattern."""
        return find_doi(ref, self.config.regexps.doi)

    def get_numeric(self, value: object) -> int | float | None:
        """Normalize a numeric-looking value using the configured patterns."""
        regexps = self.config.regexps
        return get_numeric(
            value,
            looks_numeric=regexps.looks_numeric,
            looks_numeric_whitespace=regexps.looks_numeric_whitespace,
            only_numeric=regexps.only_numeric,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _check_titles_present(self, ref_a: Reference, ref_b: Reference) -> CompareResult | None:
        if not ref_a.title or not ref_b.title:
            return _NOT_DUPE_MISSING_TITLE
        return None

    def _check_exact_fields(self, ref_a: Reference, ref_b: Reference) -> CompareResult | None:
        for name in NUMERIC_FIELDS:
            value_a = getattr(ref_a, name)
            value_b = getattr(ref_b, name)
            if not _present(value_a) or not _present(value_b):
                continue

            num_a = self.get_numeric(value_a)
            num_b = self.get_numeric(value_b)
            # Unparseable on either side is inconclusive, not a mismatch
            if num_a is None or num_b is None:
                continue

            if num_a != num_b:
                return CompareResult(is_dupe=False, reason=Reason(name))
        return None

    def _check_doi(self, ref_a: Reference, ref_b: Reference) -> CompareResult | None:
        doi_a = self.find_doi(ref_a)
        doi_b = self.find_doi(ref_b)
        if doi_a and doi_b:
            return CompareResult(is_dupe=doi_a == doi_b, reason=Reason.DOI)
        return None

    def _check_title_years(self, ref_a: Reference, ref_b: Reference) -> CompareResult | None:
        years_a = title_years(ref_a.title or "")
        years_b = title_years(ref_b.title or "")
        if not years_a and not years_b:
            return None

        shared = {year for year in years_a if year in years_b}
        if len(shared) < max(len(years_a), len(years_b)):
            return CompareResult(is_dupe=False, reason=Reason.YEAR)
        return None

    def _check_isbn(self, ref_a: Reference, ref_b: Reference) -> CompareResult | None:
        isbn_a = self.get_numeric(ref_a.isbn)
        isbn_b = self.get_numeric(ref_b.isbn)
        if isbn_a is not None and isbn_b is not None:
            return CompareResult(is_dupe=isbn_a == isbn_b, reason=Reason.ISBN)
        return None

    def _check_title_and_authors(
        self, ref_a: Reference, ref_b: Reference
    ) -> CompareResult | None:
        title_a = (ref_a.title or "").lower()
        title_b = (ref_b.title or "").lower()
        thresholds = self.config.string_distances

        titles_match = title_a == title_b or (
            self.string_distance.similarity(title_a, title_b) >= thresholds.jaro_winkler_min
            and self.string_distance.distance(title_a, title_b) <= thresholds.levenshtein_max
        )
        if titles_match and self.author_similarity.matches(ref_a.authors, ref_b.authors):
            return CompareResult(is_dupe=True, reason=Reason.TITLE_AUTHORS)
        return None


def _present(value: object) -> bool:
    # Numeric zero is an unset value
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, int | float):
        return value != 0
    return True
