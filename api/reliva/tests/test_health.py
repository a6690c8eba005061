from __future__ import annotations

import pytest

from reliva.core.config import settings


@pytest.mark.asyncio
async def test_health_reports_ok_without_allowlist(client, monkeypatch):
    called = False

    async def _snapshot_stub() -> dict[str, object]:
        nonlocal called
        called = True
        return {}

    monkeypatch.setattr("reliva.main.source_monitor.snapshot", _snapshot_stub)

    for path in ("/health", "/api/health"):
        response = await client.get(path)
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
    assert called is False


@pytest.mark.asyncio
async def test_health_includes_telemetry_for_allowlisted_hosts(client, monkeypatch):
    monkeypatch.setattr(settings, "health_allowlist", ["127.0.0.0/8"])

    async def _snapshot_stub() -> dict[str, object]:
        return {}

    monkeypatch.setattr("reliva.main.source_monitor.snapshot", _snapshot_stub)

    response = await client.get("/api/health")
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["sources"] == {"sources": {}, "issues": []}


@pytest.mark.asyncio
async def test_health_degrades_on_repeated_failures(client, monkeypatch):
    monkeypatch.setattr(settings, "health_allowlist", ["testserver"])

    async def _snapshot_stub() -> dict[str, object]:
        return {
            "saavn": {
                "operations": {
                    "artist": {
                        "started": 3,
                        "succeeded": 0,
                        "failed": 3,
                        "last_latency_ms": 120.5,
                        "last_error": "Upstream responded with status 503",
                        "last_status": 503,
                    }
                }
            }
        }

    monkeypatch.setattr("reliva.main.source_monitor.snapshot", _snapshot_stub)

    response = await client.get("/api/health")
    payload = response.json()
    assert payload["status"] == "degraded"
    saavn = payload["sources"]["sources"]["saavn"]
    assert saavn["state"] == "degraded"
    assert saavn["failed"] == 3
    reasons = {issue["reason"] for issue in payload["sources"]["issues"]}
    assert reasons == {"last_error", "repeated_failures"}
