"""Reference record data model for sradedupe.

A ``Reference`` is the unit being deduplicated. Every field is optional;
the comparison stages decide for themselves what an absent field means.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any

__all__ = ["Reference", "NUMERIC_FIELDS"]

# Identifier-like fields checked for exact agreement, in comparison order
NUMERIC_FIELDS: tuple[str, ...] = ("year", "pages", "volume", "number", "isbn")


@dataclass(frozen=True)
class Reference:
    """Bibliographic reference record.

    Attributes
    ----------
    title : str | None
        Work title. Required for any duplicate verdict.
    authors : tuple[str, ...]
        Author names in source order.
    year : str | int | None
        Publication year.
    pages : str | int | None
        Page or page range.
    volume : str | int | None
        Volume.
    number : str | int | None
        Issue number.
    isbn : str | int | None
        ISBN.
    doi : str | None
        DOI, bare or embedded in a longer string (e.g. a doi.org URL).
    urls : tuple[str, ...]
        URLs, zero or more of which may carry a DOI.
    rid : str | None
        Caller's record identifier. Passed through, never compared.
    """

    title: str | None = None
    authors: tuple[str, ...] = ()
    year: str | int | None = None
    pages: str | int | None = None
    volume: str | int | None = None
    number: str | int | None = None
    isbn: str | int | None = None
    doi: str | None = None
    urls: tuple[str, ...] = ()
    rid: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Reference":
        """Build a reference from a loosely-typed mapping.

        Unknown keys are ignored. A single URL or author given as a plain
        string is treated as a one-element list, and a non-string title, doi
        or rid (e.g. ``{"title": 1984}``) is converted to a string.

        Parameters
        ----------
        data : Mapping[str, Any]
            Source mapping (e.g. one decoded JSONL line).

        Returns
        -------
        Reference
            New reference.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {k: v for k, v in data.items() if k in known}

        kwargs["authors"] = _as_tuple(data.get("authors"))
        kwargs["urls"] = _as_tuple(data.get("urls"))

        for name in ("title", "doi", "rid"):
            value = kwargs.get(name)
            if value is not None and not isinstance(value, str):
                kwargs[name] = str(value)

        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, dropping empty fields."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value == ():
                continue
            data[f.name] = list(value) if isinstance(value, tuple) else value
        return data


def _as_tuple(value: str | Iterable[Any] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    return tuple(str(v) for v in value if v is not None)
