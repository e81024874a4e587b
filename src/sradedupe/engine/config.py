"""Comparison engine configuration dataclasses."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from sradedupe.normalize._helpers import (
    DOI_RE,
    JUNK_WORDS_RE,
    LOOKS_NUMERIC_RE,
    LOOKS_NUMERIC_WHITESPACE_RE,
    ONLY_NUMERIC_RE,
)

__all__ = ["DedupeConfig", "Regexps", "StringDistances"]

# Option names accepted by from_dict besides the dataclass field names
_ALIASES: dict[str, str] = {
    "stringDistances": "string_distances",
    "junkWords": "junk_words",
    "looksNumeric": "looks_numeric",
    "looksNumericWhitespace": "looks_numeric_whitespace",
    "onlyNumeric": "only_numeric",
    "jaroWinklerMin": "jaro_winkler_min",
    "levenshteinMax": "levenshtein_max",
}


@dataclass(frozen=True)
class Regexps:
    """Pattern definitions used by the field extractors.

    Attributes
    ----------
    doi : re.Pattern[str]
        DOI detection.
    junk_words : re.Pattern[str]
        Filler words ("the", "a") that callers may strip from titles.
    looks_numeric : re.Pattern[str]
        Whole-string test for numeric-looking values.
    looks_numeric_whitespace : re.Pattern[str]
        Same test tolerating surrounding whitespace.
    only_numeric : re.Pattern[str]
        Characters removed before parsing a numeric-looking value.

    Notes
    -----
    Plain strings are compiled on construction.
    """

    doi: re.Pattern[str] = DOI_RE
    junk_words: re.Pattern[str] = JUNK_WORDS_RE
    looks_numeric: re.Pattern[str] = LOOKS_NUMERIC_RE
    looks_numeric_whitespace: re.Pattern[str] = LOOKS_NUMERIC_WHITESPACE_RE
    only_numeric: re.Pattern[str] = ONLY_NUMERIC_RE

    def __post_init__(self) -> None:
        """Compile string patterns."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str):
                try:
                    object.__setattr__(self, f.name, re.compile(value))
                except re.error as e:
                    raise ValueError(f"Invalid pattern for regexps.{f.name}: {e}") from e
            elif not isinstance(value, re.Pattern):
                raise ValueError(
                    f"regexps.{f.name} must be a pattern or string, got {type(value).__name__}"
                )

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary of pattern strings."""
        return {f.name: getattr(self, f.name).pattern for f in fields(self)}


@dataclass(frozen=True)
class StringDistances:
    """Thresholds for the fuzzy title comparison.

    Attributes
    ----------
    jaro_winkler_min : float
        Minimum Jaro-Winkler similarity between titles (default: 0.9).
    levenshtein_max : int
        Maximum Levenshtein edit distance between titles (default: 10).
    """

    jaro_winkler_min: float = 0.9
    levenshtein_max: int = 10

    def __post_init__(self) -> None:
        """Validate thresholds."""
        if isinstance(self.jaro_winkler_min, bool) or not isinstance(
            self.jaro_winkler_min, int | float
        ):
            raise ValueError(
                f"jaro_winkler_min must be a number, got {type(self.jaro_winkler_min).__name__}"
            )
        if isinstance(self.levenshtein_max, bool) or not isinstance(self.levenshtein_max, int):
            raise ValueError(
                f"levenshtein_max must be an integer, got {type(self.levenshtein_max).__name__}"
            )

        if not 0.0 <= self.jaro_winkler_min <= 1.0:
            raise ValueError(f"jaro_winkler_min must be in [0, 1], got {self.jaro_winkler_min}")

        if self.levenshtein_max < 0:
            raise ValueError(f"levenshtein_max must be >= 0, got {self.levenshtein_max}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "jaro_winkler_min": self.jaro_winkler_min,
            "levenshtein_max": self.levenshtein_max,
        }


@dataclass(frozen=True)
class DedupeConfig:
    """Immutable settings for the comparison engine.

    Attributes
    ----------
    regexps : Regexps
        Pattern definitions for the field extractors.
    string_distances : StringDistances
        Fuzzy title thresholds.

    Examples
    --------
    Override a single threshold, keeping every other default:

        >>> config = DedupeConfig.from_dict({"stringDistances": {"levenshteinMax": 5}})
        >>> config.string_distances.jaro_winkler_min
        0.9
    """

    regexps: Regexps = field(default_factory=Regexps)
    string_distances: StringDistances = field(default_factory=StringDistances)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None = None) -> "DedupeConfig":
        """Merge a partial settings mapping over the defaults.

        Each section is merged field by field: options that are not given
        keep their default. Both snake_case field names and the camelCase
        option names (``stringDistances.jaroWinklerMin``) are accepted.

        Parameters
        ----------
        data : Mapping[str, Any] | None, optional
            Partial settings.

        Returns
        -------
        DedupeConfig
            Resolved configuration.

        Raises
        ------
        ValueError
            If an option is unknown or a value is invalid.
        """
        config = cls()
        if not data:
            return config

        sections: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in ("regexps", "string_distances"):
                raise ValueError(f"Unknown configuration section: {key!r}")
            sections[name] = _merge_section(getattr(config, name), value, name)

        return replace(config, **sections)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "regexps": self.regexps.to_dict(),
            "string_distances": self.string_distances.to_dict(),
        }


def _merge_section(current: Any, overrides: Any, section: str) -> Any:
    if isinstance(overrides, Regexps | StringDistances):
        return overrides
    if not isinstance(overrides, Mapping):
        raise ValueError(f"Configuration section {section!r} must be a mapping")

    known = {f.name for f in fields(current)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        name = _ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"Unknown option {section}.{key}")
        changes[name] = value

    return replace(current, **changes)
