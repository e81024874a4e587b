"""DOI extraction."""

import re

from sradedupe.models.records import Reference

from ._helpers import DOI_RE


def find_doi(ref: Reference, pattern: re.Pattern[str] = DOI_RE) -> str | None:
    """Locate and extract a DOI from a reference.

    The ``doi`` field is tried first. Failing that, the ``urls`` are
    scanned and a DOI is taken from them only when exactly one URL
    carries one.

    Parameters
    ----------
    ref : Reference
        Reference to examine.
    pattern : re.Pattern[str], optional
        DOI pattern, by default the doi-regex expression.

    Returns
    -------
    str | None
        The bare DOI (any URL prefix dropped), or None when absent or
        ambiguous.

    Notes
    -----
    Two or more DOI-bearing URLs on one record are not resolved further;
    the record is treated as having no usable DOI.
    """
    if ref.doi:
        match = pattern.search(ref.doi)
        if match:
            return match.group(0)

    matching = [m for m in (pattern.search(url) for url in ref.urls) if m]
    if len(matching) == 1:
        return matching[0].group(0)

    return None
