"""Tests for the text-similarity capabilities."""

import pytest

from sradedupe.scoring import (
    AuthorSimilarity,
    RapidfuzzStringDistance,
    SignatureAuthorSimilarity,
    StringDistance,
)


@pytest.fixture
def strings() -> RapidfuzzStringDistance:
    return RapidfuzzStringDistance()


@pytest.fixture
def authors() -> SignatureAuthorSimilarity:
    return SignatureAuthorSimilarity()


# ========== String distance ==========


@pytest.mark.unit
def test_defaults_satisfy_protocols(
    strings: RapidfuzzStringDistance, authors: SignatureAuthorSimilarity
) -> None:
    """Test default implementations satisfy the capability protocols."""
    assert isinstance(strings, StringDistance)
    assert isinstance(authors, AuthorSimilarity)


@pytest.mark.unit
def test_string_similarity_bounds(strings: RapidfuzzStringDistance) -> None:
    """Test identical strings score 1 and disjoint strings score 0."""
    assert strings.similarity("title", "title") == pytest.approx(1.0)
    assert strings.similarity("abc", "xyz") == pytest.approx(0.0)


@pytest.mark.unit
def test_string_similarity_near_identical_titles(strings: RapidfuzzStringDistance) -> None:
    """Test a one-character difference stays above the default threshold."""
    score = strings.similarity("machine learning basics", "machine learning basic")
    assert score >= 0.9


@pytest.mark.unit
def test_levenshtein_distance(strings: RapidfuzzStringDistance) -> None:
    """Test edit distance counts single-character edits."""
    assert strings.distance("kitten", "sitting") == 3
    assert strings.distance("same", "same") == 0


# ========== Author similarity ==========


@pytest.mark.unit
def test_authors_identical_lists_match(authors: SignatureAuthorSimilarity) -> None:
    """Test identical author lists match."""
    assert authors.matches(["Smith J"], ["Smith J"])


@pytest.mark.unit
def test_authors_format_insensitive(authors: SignatureAuthorSimilarity) -> None:
    """Test differing name formats for the same people match."""
    assert authors.matches(["Smith, John", "Doe, Alice"], ["John Smith", "A. Doe"])
    assert authors.matches(["Smith J"], ["Smith, John"])


@pytest.mark.unit
def test_authors_subset_matches(authors: SignatureAuthorSimilarity) -> None:
    """Test a truncated author list still matches the full one."""
    assert authors.matches(["Smith J"], ["Smith J", "Doe A", "Lee K"])


@pytest.mark.unit
def test_authors_different_people_do_not_match(authors: SignatureAuthorSimilarity) -> None:
    """Test disjoint author lists do not match."""
    assert not authors.matches(["Smith, John"], ["Jones, Mary"])
    assert not authors.matches(["Smith, John"], ["Smith, Kate"])


@pytest.mark.unit
def test_authors_family_only_matches_any_initial(authors: SignatureAuthorSimilarity) -> None:
    """Test a family-only name is compatible with any initial."""
    assert authors.matches(["Smith"], ["Smith, John"])


@pytest.mark.unit
@pytest.mark.parametrize(("a", "b"), [([], []), (["Smith J"], []), ([], ["Smith J"])])
def test_authors_empty_never_match(
    authors: SignatureAuthorSimilarity, a: list[str], b: list[str]
) -> None:
    """Test empty author lists never count as a match."""
    assert not authors.matches(a, b)
