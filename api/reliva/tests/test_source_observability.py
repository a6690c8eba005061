import pytest

from reliva.services.resolver import Attempt, resolve_first
from reliva.sources.http import UpstreamError
from reliva.sources.observability import SourceMonitor


@pytest.mark.asyncio
async def test_source_monitor_tracks_success_and_failure():
    monitor = SourceMonitor()

    async def _ok() -> str:
        return "ok"

    async def _fail() -> None:
        raise UpstreamError("boom ?key=secret", status_code=503)

    assert await monitor.track("saavn", "artist", _ok) == "ok"
    with pytest.raises(UpstreamError):
        await monitor.track("saavn", "artist", _fail)

    metrics = (await monitor.snapshot())["saavn"]["operations"]["artist"]
    assert metrics["started"] == 2
    assert metrics["succeeded"] == 1
    assert metrics["failed"] == 1
    assert metrics["last_status"] == 503
    assert "secret" not in metrics["last_error"]

    await monitor.reset()
    assert await monitor.snapshot() == {}


@pytest.mark.asyncio
async def test_resolve_first_walks_attempts_in_order():
    calls: list[str] = []

    def _attempt(name: str, result):
        async def _call():
            calls.append(name)
            if isinstance(result, Exception):
                raise result
            return result

        return Attempt(name, _call)

    resolution = await resolve_first(
        "459320",
        [
            _attempt("primary", UpstreamError("down")),
            _attempt("mirror", {"name": ""}),
            _attempt("alias", {"name": "Arijit Singh"}),
            _attempt("never", {"name": "Other"}),
        ],
        lambda value: bool(value.get("name")),
    )

    assert resolution is not None
    assert resolution.source == "alias"
    assert resolution.position == 2
    assert calls == ["primary", "mirror", "alias"]


@pytest.mark.asyncio
async def test_resolve_first_returns_none_and_propagates_other_errors():
    async def _down():
        raise UpstreamError("down")

    assert await resolve_first("x", [Attempt("a", _down)], bool) is None

    async def _broken():
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError):
        await resolve_first("x", [Attempt("a", _broken)], bool)
