"""Numeric normalization for identifier-like fields."""

import re

from ._helpers import LOOKS_NUMERIC_RE, LOOKS_NUMERIC_WHITESPACE_RE, ONLY_NUMERIC_RE


def get_numeric(
    value: object,
    *,
    looks_numeric: re.Pattern[str] = LOOKS_NUMERIC_RE,
    looks_numeric_whitespace: re.Pattern[str] = LOOKS_NUMERIC_WHITESPACE_RE,
    only_numeric: re.Pattern[str] = ONLY_NUMERIC_RE,
) -> int | float | None:
    """Return the numeric version of *value*, or None if it is not numeric.

    Parameters
    ----------
    value : object
        Raw field value (usually a string or a number).
    looks_numeric : re.Pattern[str], optional
        Whole-string test for numeric-looking values.
    looks_numeric_whitespace : re.Pattern[str], optional
        Same test tolerating surrounding whitespace.
    only_numeric : re.Pattern[str], optional
        Characters stripped before parsing.

    Returns
    -------
    int | float | None
        Numbers are returned unchanged. Numeric-looking strings have every
        non-digit removed and are parsed as int, so "12-15" becomes 1215 and
        "3.7" becomes 37. Anything else, including digit runs too long
        to convert, yields None.

    Examples
    --------
        >>> get_numeric("978-0-306-40615-7")
        9780306406157
        >>> get_numeric("vol. 3") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    if not isinstance(value, str):
        return None

    if not (looks_numeric.search(value) or looks_numeric_whitespace.search(value)):
        return None

    digits = only_numeric.sub("", value)
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        # Beyond the interpreter's int-conversion digit limit
        return None
