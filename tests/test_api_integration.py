# tests/test_api_integration.py
"""
Integration Tests for the Chronolens HTTP API.

Focus
-----
These tests verify the HTTP contract (request/response shapes) and the async
ingestion job state machine against a fresh in-memory store per test.

Scenarios
---------
1. **Ingestion**: Submit -> 202 -> Poll (COMPLETED) with per-line errors.
2. **Reads**: list, lookup, search, timeline.
3. **Insights**: overlaps, gaps, influence path.
4. **Error Handling**: 404s for unknown jobs/events, FAILED for bad paths.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from factories import HEADER, line, sample_file_text
from fastapi.testclient import TestClient

from chronolens.api.app import create_app
from chronolens.api.dependencies import get_event_store
from chronolens.core.settings import load_settings
from chronolens.ingestion.jobs import get_job_store
from chronolens.store.base import EventStore
from chronolens.store.memory import InMemoryEventStore


@pytest.fixture  # type: ignore[misc]
def client() -> Generator[TestClient, None, None]:
    """
    A clean API client per test.

    The JobStore singleton is cleared and the event store dependency is
    replaced with a fresh in-memory store.
    """
    get_job_store().clear()
    store = InMemoryEventStore()

    def _store() -> EventStore:
        return store

    app = create_app()
    app.dependency_overrides[get_event_store] = _store
    with TestClient(app) as c:
        yield c


def _ingest(client: TestClient, text: str) -> dict:
    resp = client.post(
        "/api/events/ingest", content=text.encode("utf-8"), headers={"Content-Type": "text/plain"}
    )
    assert resp.status_code == 202, resp.text
    job_id = resp.json()["jobId"]
    assert job_id.startswith("ingest-job-")

    # TestClient runs BackgroundTasks before returning, so the job is done.
    status_resp = client.get(f"/api/events/ingestion-status/{job_id}")
    assert status_resp.status_code == 200
    return status_resp.json()


def test_ingest_and_poll_flow(client: TestClient) -> None:
    text = "\n".join(
        [
            HEADER,
            line("e1", "2020-01-01T09:00:00Z", "2020-01-01T10:00:00Z"),
            "broken|line",
            line("e2", "2020-01-01T11:00:00Z", "2020-01-01T12:00:00Z"),
            line("e3", "never", "2020-01-01T12:00:00Z"),
        ]
    )
    job = _ingest(client, text)

    assert job["status"] == "COMPLETED"
    assert job["totalLines"] == 4
    assert job["processedLines"] == 2
    assert job["errorLines"] == 2
    assert job["errors"] == [
        "Line 3: Malformed entry at line 3",
        "Line 5: Invalid date at line 5",
    ]
    assert job["startTime"] and job["endTime"]


def test_ingest_path_missing_file_fails(client: TestClient, tmp_path: Path) -> None:
    resp = client.post(
        "/api/events/ingest_path", json={"filePath": str(tmp_path / "missing.txt")}
    )
    assert resp.status_code == 202
    job = client.get(f"/api/events/ingestion-status/{resp.json()['jobId']}").json()
    assert job["status"] == "FAILED"
    assert job["errors"][-1].startswith("Source:")


def test_ingest_path_reads_file(client: TestClient, tmp_path: Path) -> None:
    path = tmp_path / "events.txt"
    path.write_text(sample_file_text(), encoding="utf-8")

    resp = client.post("/api/events/ingest_path", json={"filePath": str(path)})
    job = client.get(f"/api/events/ingestion-status/{resp.json()['jobId']}").json()
    assert job["status"] == "COMPLETED" and job["processedLines"] == 4

    events = client.get("/api/events").json()
    assert [e["event_id"] for e in events] == ["root", "child-a", "child-b", "grand"]


def test_unknown_job_and_event_are_404(client: TestClient) -> None:
    assert client.get("/api/events/ingestion-status/fake").status_code == 404
    assert client.get("/api/events/ghost").status_code == 404
    assert client.get("/api/timeline/ghost").status_code == 404


def test_lookup_search_and_timeline(client: TestClient) -> None:
    _ingest(client, sample_file_text())

    event = client.get("/api/events/child-a").json()
    assert event["parent_event_id"] == "root"
    assert event["duration_minutes"] == 60
    assert event["metadata"] == {"line": 3}

    found = client.get("/api/events/search", params={"name": "root"}).json()
    assert found["page"] == 1 and found["limit"] == 10
    assert [e["event_id"] for e in found["events"]] == ["root"]

    ordered = client.get(
        "/api/events/search", params={"sortBy": "duration_minutes", "sortOrder": "desc", "limit": 2}
    ).json()
    assert [e["event_id"] for e in ordered["events"]] == ["root", "child-a"]

    tree = client.get("/api/timeline/root").json()
    assert [c["event_id"] for c in tree["children"]] == ["child-a", "child-b"]
    assert tree["children"][1]["children"][0]["event_id"] == "grand"


def test_timeline_cycle_is_conflict(client: TestClient) -> None:
    text = "\n".join(
        [
            HEADER,
            line("x", "2020-01-01T09:00:00Z", "2020-01-01T10:00:00Z", parent="y"),
            line("y", "2020-01-01T10:00:00Z", "2020-01-01T11:00:00Z", parent="x"),
        ]
    )
    _ingest(client, text)
    resp = client.get("/api/timeline/x")
    assert resp.status_code == 409
    assert "Cycle" in resp.json()["detail"]


def _chain_text(length: int) -> str:
    rows = [HEADER, line("n0", "2020-01-01T09:00:00Z", "2020-01-01T10:00:00Z")]
    rows += [
        line(f"n{i}", "2020-01-01T09:00:00Z", "2020-01-01T10:00:00Z", parent=f"n{i - 1}")
        for i in range(1, length)
    ]
    return "\n".join(rows)


def test_timeline_serves_chain_at_default_depth(client: TestClient) -> None:
    limit = load_settings().max_timeline_depth
    job = _ingest(client, _chain_text(limit))
    assert job["processedLines"] == limit

    resp = client.get("/api/timeline/n0")
    assert resp.status_code == 200, resp.text
    node = resp.json()
    depth = 1
    while node["children"]:
        node = node["children"][0]
        depth += 1
    assert depth == limit and node["event_id"] == f"n{limit - 1}"


def test_timeline_past_default_depth_is_conflict(client: TestClient) -> None:
    limit = load_settings().max_timeline_depth
    _ingest(client, _chain_text(limit + 1))
    resp = client.get("/api/timeline/n0")
    assert resp.status_code == 409
    assert str(limit) in resp.json()["detail"]


def test_insights_endpoints(client: TestClient) -> None:
    _ingest(client, sample_file_text())

    overlaps = client.get("/api/insights/overlapping-events").json()
    assert len(overlaps) == 1
    assert [e["event_id"] for e in overlaps[0]["overlappingEventPairs"]] == ["root", "child-a"]
    assert overlaps[0]["overlap_duration_minutes"] == 30

    gaps = client.get(
        "/api/insights/temporal-gaps",
        params={"startDate": "2020-01-01T00:00:00Z", "endDate": "2020-01-02T00:00:00Z"},
    ).json()
    assert gaps["message"] == "Largest temporal gap identified."
    assert gaps["largestGap"]["durationMinutes"] == 45
    assert gaps["largestGap"]["precedingEvent"]["event_id"] == "child-b"

    empty = client.get(
        "/api/insights/temporal-gaps",
        params={"startDate": "2021-01-01T00:00:00Z", "endDate": "2021-01-02T00:00:00Z"},
    ).json()
    assert empty["largestGap"] is None

    path = client.get("/api/insights/event-influence", params={"from": "root", "to": "grand"})
    assert path.status_code == 200
    data = path.json()
    assert data["from"] == "root" and data["to"] == "grand"
    assert [e["event_id"] for e in data["path"]] == ["root", "child-b", "grand"]
    assert data["total_duration"] == 60 + 15 + 5

    missing = client.get("/api/insights/event-influence", params={"from": "grand", "to": "root"})
    assert missing.status_code == 404
    assert missing.json()["detail"] == "No influence path found."


def test_reingest_is_idempotent(client: TestClient) -> None:
    _ingest(client, sample_file_text())
    _ingest(client, sample_file_text())
    assert len(client.get("/api/events").json()) == 4
