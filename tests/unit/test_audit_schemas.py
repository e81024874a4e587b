"""Tests for schema validation of audit events."""

import json
from pathlib import Path

import jsonschema
import pytest

from sradedupe import Reference, find_duplicates
from sradedupe.audit import AuditLogger

_SCHEMAS_DIR = Path(__file__).parent.parent.parent / "schemas"


@pytest.fixture(scope="module")
def event_schema() -> dict:
    """Load log event JSON schema."""
    with (_SCHEMAS_DIR / "log_event.schema.json").open() as f:
        return json.load(f)


@pytest.mark.unit
def test_generated_events_validate(tmp_path: Path, event_schema: dict) -> None:
    """Test events from a full logged scan validate against the schema."""
    log_path = tmp_path / "events.jsonl"
    refs = [
        Reference(title="Paper", doi="10.1000/x", rid="a"),
        Reference(title="Paper", doi="10.1000/x", rid="b"),
        Reference(title=None, rid="c"),
    ]

    with AuditLogger(run_id="run-1", log_path=log_path) as logger:
        logger.run_started(command=["sradedupe", "scan"], parameters={})
        find_duplicates(refs, logger=logger)
        logger.error(exception_class="ValueError", message="x", rid="c")
        logger.run_finished(status="success", duration_seconds=0.01, records_processed=3)

    lines = [line for line in log_path.read_text().splitlines() if line.strip()]
    assert len(lines) == 6
    for line in lines:
        jsonschema.validate(instance=json.loads(line), schema=event_schema)


@pytest.mark.unit
@pytest.mark.parametrize(
    "mutation",
    [
        {"level": "TRACE"},
        {"ts": "yesterday"},
        {"extra": 1},
        {"data": []},
    ],
)
def test_invalid_events_rejected(event_schema: dict, mutation: dict) -> None:
    """Test the schema rejects bad levels, timestamps and shapes."""
    event = {
        "ts": "2026-01-01T00:00:00.000Z",
        "run_id": "r",
        "level": "INFO",
        "event": "stage_started",
        "data": {},
        "stage": None,
        "rid": None,
    }
    jsonschema.validate(instance=event, schema=event_schema)

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance={**event, **mutation}, schema=event_schema)


@pytest.mark.unit
def test_missing_field_rejected(event_schema: dict) -> None:
    """Test every envelope field is required."""
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(
            instance={"ts": "2026-01-01T00:00:00Z", "run_id": "r", "level": "INFO"},
            schema=event_schema,
        )
