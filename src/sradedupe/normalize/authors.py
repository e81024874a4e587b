"""Author name parsing into match signatures."""

from ._helpers import INITIALS_RE, NAME_PUNCT_RE, SUFFIX_RE, strip_accents


def author_signatures(author_str: str) -> frozenset[str]:
    """Compute the set of ``family|initial`` signatures a name may stand for.

    "Family, Given" input is unambiguous and yields a single signature.
    Without a comma the name could be "Family Given" (RIS, NBIB) or
    "Given Family" (BibTeX, WoS), so both readings are returned.

    Parameters
    ----------
    author_str : str
        Author name as found in the record.

    Returns
    -------
    frozenset[str]
        Casefolded, accent-stripped signatures; empty for blank input.

    Examples
    --------
        >>> sorted(author_signatures("Smith, John"))
        ['smith|j']
        >>> sorted(author_signatures("John Smith"))
        ['john|s', 'smith|j']
    """
    author_str = author_str.strip()
    if not author_str or author_str.casefold() == "et al.":
        return frozenset()

    if "," in author_str:
        family, rest = (part.strip() for part in author_str.split(",", 1))
        family = _strip_suffix(family)
        return frozenset({_signature(family, _first_initial(rest))})

    parts = _strip_suffix(author_str).split()
    if len(parts) == 1:
        return frozenset({_signature(parts[0], "")})

    return frozenset(
        {
            _signature(parts[0], _first_initial(" ".join(parts[1:]))),
            _signature(parts[-1], _first_initial(" ".join(parts[:-1]))),
        }
    )


def _strip_suffix(name: str) -> str:
    match = SUFFIX_RE.search(name)
    return name[: match.start()].strip() if match else name


def _first_initial(given: str) -> str:
    given = given.strip()
    if not given:
        return ""
    # "J.R." or "JR" style initials
    if INITIALS_RE.match(given):
        return given[0].upper()
    return given.split()[0][0].upper()


def _signature(family: str, initial: str) -> str:
    family_norm = strip_accents(NAME_PUNCT_RE.sub("", family).casefold())
    return f"{family_norm}|{strip_accents(initial.casefold())}"
