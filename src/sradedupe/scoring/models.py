"""Verdict types produced by the pairwise comparator."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

__all__ = ["CompareResult", "Reason"]


class Reason(StrEnum):
    """Why the staged comparison stopped.

    Attributes
    ----------
    MISSING_TITLE : str
        One side has no title.
    YEAR : str
        Publication years differ, or titles embed different years.
    PAGES : str
        Pages differ.
    VOLUME : str
        Volumes differ.
    NUMBER : str
        Issue numbers differ.
    ISBN : str
        Decided by ISBN (either the exact-field check or the ISBN match).
    DOI : str
        Decided by DOI equality.
    TITLE_AUTHORS : str
        Titles and authors are close enough.
    EXHAUSTED : str
        No stage reached a decision.
    """

    MISSING_TITLE = "missing title"
    YEAR = "year"
    PAGES = "pages"
    VOLUME = "volume"
    NUMBER = "number"
    ISBN = "isbn"
    DOI = "doi"
    TITLE_AUTHORS = "title+authors"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class CompareResult:
    """Duplicate verdict for one pair of references.

    Attributes
    ----------
    is_dupe : bool
        Whether the references describe the same work.
    reason : Reason
        Stage or field that decided the verdict.
    """

    is_dupe: bool
    reason: Reason

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"is_dupe": self.is_dupe, "reason": str(self.reason)}
