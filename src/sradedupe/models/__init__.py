"""Shared data types for sradedupe.

Domain-specific types live closer to their consumers:
- Verdict types → sradedupe.scoring.models
- Audit types → sradedupe.audit.models
"""

from sradedupe.models.records import NUMERIC_FIELDS, Reference

__all__ = [
    "NUMERIC_FIELDS",
    "Reference",
]
