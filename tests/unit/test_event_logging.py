"""Unit tests for the pipeline event log."""

import json

import pytest

from folio.utils.event_logging import get_recent_events, log_pipeline_event
from folio.utils.timestamp import format_timestamp


@pytest.mark.unit
def test_events_are_json_lines(tmp_path):
    events_file = tmp_path / "logs" / "events.log"

    log_pipeline_event("render_started", "resume", "rendering", events_file=events_file, page_format="A4")
    log_pipeline_event("render_completed", "resume", "rendering", events_file=events_file, size_bytes=10)

    lines = events_file.read_text().splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["event_type"] == "render_started"
    assert first["document_name"] == "resume"
    assert first["source"] == "rendering"
    assert first["page_format"] == "A4"
    assert "timestamp" in first


@pytest.mark.unit
def test_recent_events_filters(tmp_path):
    events_file = tmp_path / "events.log"
    for i in range(5):
        log_pipeline_event("render_started", "resume", "rendering", events_file=events_file, run=i)
        log_pipeline_event("render_failed", "cover", "rendering", events_file=events_file, run=i)

    recent = get_recent_events(3, events_file=events_file)
    assert len(recent) == 3
    assert recent[-1]["run"] == 4

    failed = get_recent_events(10, event_type="render_failed", events_file=events_file)
    assert len(failed) == 5
    assert all(e["document_name"] == "cover" for e in failed)

    resume = get_recent_events(2, document_name="resume", events_file=events_file)
    assert [e["run"] for e in resume] == [3, 4]


@pytest.mark.unit
def test_recent_events_skips_malformed_lines(tmp_path):
    events_file = tmp_path / "events.log"
    log_pipeline_event("render_started", "resume", "rendering", events_file=events_file)
    with open(events_file, "a") as f:
        f.write("{not json\n")

    assert len(get_recent_events(events_file=events_file)) == 1


@pytest.mark.unit
def test_recent_events_without_log(tmp_path):
    assert get_recent_events(events_file=tmp_path / "missing.log") == []


@pytest.mark.unit
def test_format_timestamp():
    assert format_timestamp("2025-11-13T18:45:40.572549") == "2025-11-13 18:45:40"
    assert format_timestamp("not a timestamp") == "not a timestamp"
