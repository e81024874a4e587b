"""Structured audit logging for sradedupe scans.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: run identifier factory
"""

from sradedupe.audit.helpers import generate_run_id, parse_iso_timestamp
from sradedupe.audit.logger import AuditLogger
from sradedupe.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "parse_iso_timestamp",
]
