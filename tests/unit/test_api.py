"""Tests for the public API module."""

import asyncio
import json
from pathlib import Path

import pytest

from sradedupe import (
    CompareResult,
    Dedupe,
    DedupeConfig,
    DuplicatePair,
    Reason,
    Reference,
    ReferenceLoadError,
    find_duplicates,
    load_references,
    write_jsonl,
)

# ---------------------------------------------------------------------------
# Dedupe facade
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_dedupe_accepts_partial_mapping() -> None:
    """Test a settings mapping is merged over the defaults."""
    dedupe = Dedupe({"stringDistances": {"jaroWinklerMin": 0.95}})

    assert dedupe.config.string_distances.jaro_winkler_min == 0.95
    assert dedupe.config.string_distances.levenshtein_max == 10


@pytest.mark.unit
def test_dedupe_accepts_config_instance() -> None:
    """Test a ready DedupeConfig is used as-is."""
    config = DedupeConfig()
    assert Dedupe(config).config is config


@pytest.mark.unit
def test_dedupe_extractors() -> None:
    """Test find_doi and get_numeric are exposed on the facade."""
    dedupe = Dedupe()

    assert dedupe.find_doi(Reference(urls=("https://doi.org/10.1000/abc",))) == "10.1000/abc"
    assert dedupe.get_numeric("12-15") == 1215
    assert dedupe.get_numeric("n/a") is None


@pytest.mark.unit
def test_dedupe_compare() -> None:
    """Test compare delegates to the staged comparator."""
    result = Dedupe().compare(
        Reference(title="A Study of X", doi="10.1000/xyz123"),
        Reference(title="Completely Different", doi="10.1000/xyz123"),
    )
    assert result == CompareResult(is_dupe=True, reason=Reason.DOI)


@pytest.mark.unit
def test_dedupe_scan_all_chains_and_emits() -> None:
    """Test scan_all returns the detector and reports through its events."""
    refs = [
        Reference(title="Paper", doi="10.1000/a"),
        Reference(title="Paper", doi="10.1000/a"),
        Reference(title="Other"),
    ]
    progress: list[tuple[int, int]] = []
    dupes: list[CompareResult] = []
    ended: list[bool] = []

    dedupe = (
        Dedupe()
        .on("progress", lambda i, n: progress.append((i, n)))
        .on("dupe", lambda a, b, r: dupes.append(r))
        .on("end", lambda: ended.append(True))
    )

    assert dedupe.scan_all(refs) is dedupe
    assert progress == [(1, 3), (2, 3), (3, 3)]
    assert dupes == [CompareResult(is_dupe=True, reason=Reason.DOI)]
    assert ended == [True]
    assert dedupe.last_stats is not None
    assert dedupe.last_stats.duplicates_found == 1


@pytest.mark.unit
def test_dedupe_fetch_ref_hook() -> None:
    """Test an injected fetch hook hydrates ids into references."""
    store = {
        "a": Reference(title="Same", isbn="123"),
        "b": Reference(title="Different", isbn="123"),
    }
    dupes: list[tuple[Reference, Reference]] = []

    Dedupe(fetch_ref=store.__getitem__).on("dupe", lambda a, b, r: dupes.append((a, b))).scan_all(
        ["a", "b"]
    )

    assert dupes == [(store["a"], store["b"])]


@pytest.mark.unit
def test_dedupe_fetch_ref_override() -> None:
    """Test subclasses can override fetch_ref."""

    class RidLookup(Dedupe):
        def fetch_ref(self, ref: str) -> Reference:
            return Reference(title=f"Title {ref}", rid=ref)

    seen: list[int] = []
    RidLookup().on("progress", lambda i, n: seen.append(i)).scan_all(["1", "2", "3"])

    assert seen == [1, 2, 3]


@pytest.mark.unit
def test_dedupe_default_fetch_is_identity() -> None:
    """Test the default hook returns its input unchanged."""
    ref = Reference(title="X")
    assert Dedupe().fetch_ref(ref) is ref


@pytest.mark.unit
def test_dedupe_ascan_all() -> None:
    """Test async scan with an async fetch hook."""

    async def fetch(key: int) -> Reference:
        await asyncio.sleep(0)
        return Reference(title="Same Title", authors=("Smith J",), rid=str(key))

    ended: list[bool] = []
    dedupe = Dedupe(fetch_ref=fetch).on("end", lambda: ended.append(True))

    result = asyncio.run(dedupe.ascan_all([1, 2, 3]))

    assert result is dedupe
    assert ended == [True]
    assert dedupe.last_stats is not None
    assert dedupe.last_stats.duplicates_found == 3


# ---------------------------------------------------------------------------
# find_duplicates / load_references / write_jsonl
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_find_duplicates_records_indices() -> None:
    """Test collected pairs carry their positions in the input."""
    refs = [
        Reference(title="Alpha", doi="10.1000/a"),
        Reference(title="Beta"),
        Reference(title="Gamma", doi="10.1000/a"),
        Reference(title="Delta", isbn="42"),
        Reference(title="Epsilon", isbn="42"),
    ]

    pairs = find_duplicates(refs)

    assert [(p.index_a, p.index_b) for p in pairs] == [(0, 2), (3, 4)]
    assert [p.result.reason for p in pairs] == [Reason.DOI, Reason.ISBN]
    assert pairs[0].ref_a is refs[0]


@pytest.mark.unit
def test_find_duplicates_accepts_generator() -> None:
    """Test a one-shot iterable yields the same indexed pairs."""
    titles = ["Gamma", "Alpha", "Gamma"]
    refs = (Reference(title=t, authors=("Smith J",)) for t in titles)

    pairs = find_duplicates(refs)

    assert [(p.index_a, p.index_b) for p in pairs] == [(0, 2)]


@pytest.mark.unit
def test_find_duplicates_honours_config() -> None:
    """Test thresholds passed to find_duplicates are applied."""
    refs = [
        Reference(title="Machine Learning Basics", authors=("Smith J",)),
        Reference(title="Machine Learning Basic", authors=("Smith J",)),
    ]

    assert len(find_duplicates(refs)) == 1
    assert find_duplicates(refs, config={"stringDistances": {"levenshteinMax": 0}}) == []


@pytest.mark.unit
def test_load_references(tmp_path: Path) -> None:
    """Test JSONL lines become references and blank lines are skipped."""
    path = tmp_path / "refs.jsonl"
    path.write_text(
        '{"rid": 7, "title": "T", "authors": ["A B"], "urls": "https://x.org"}\n'
        "\n"
        '{"title": "U", "year": 2001, "extra": "ignored"}\n',
        encoding="utf-8",
    )

    refs = load_references(path)

    assert refs == [
        Reference(title="T", authors=("A B",), urls=("https://x.org",), rid="7"),
        Reference(title="U", year=2001),
    ]


@pytest.mark.unit
def test_from_dict_stringifies_scalar_title_and_doi() -> None:
    """Test numeric titles and DOIs from JSON become strings and compare cleanly."""
    a = Reference.from_dict({"title": 1984, "authors": ["Orwell G"], "rid": 1})
    b = Reference.from_dict({"title": "1984", "authors": ["Orwell, George"], "doi": 10.5})

    assert a.title == "1984"
    assert a.rid == "1"
    assert b.doi == "10.5"
    assert Dedupe().compare(a, b) == CompareResult(is_dupe=True, reason=Reason.TITLE_AUTHORS)


@pytest.mark.unit
def test_load_references_missing_file(tmp_path: Path) -> None:
    """Test missing input raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_references(tmp_path / "nope.jsonl")


@pytest.mark.unit
@pytest.mark.parametrize("bad_line", ["{not json", "[1, 2]"])
def test_load_references_bad_line(tmp_path: Path, bad_line: str) -> None:
    """Test malformed lines raise ReferenceLoadError with location."""
    path = tmp_path / "refs.jsonl"
    path.write_text('{"title": "ok"}\n' + bad_line + "\n", encoding="utf-8")

    with pytest.raises(ReferenceLoadError) as exc_info:
        load_references(path)

    assert exc_info.value.line == 2
    assert exc_info.value.file == str(path)


@pytest.mark.unit
def test_write_jsonl(tmp_path: Path) -> None:
    """Test pairs are written one sorted-key JSON object per line."""
    pair = DuplicatePair(
        index_a=0,
        index_b=2,
        ref_a=Reference(title="Ünïcode", rid="r1"),
        ref_b=Reference(title="Unicode"),
        result=CompareResult(is_dupe=True, reason=Reason.TITLE_AUTHORS),
    )
    output = tmp_path / "sub" / "dupes.jsonl"

    assert write_jsonl([pair], output) == 1

    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0]) == {
        "index_a": 0,
        "index_b": 2,
        "rid_a": "r1",
        "rid_b": None,
        "title_a": "Ünïcode",
        "title_b": "Unicode",
        "reason": "title+authors",
    }
    assert "Ünïcode" in lines[0]
    assert lines[0].index('"index_a"') < lines[0].index('"reason"')
