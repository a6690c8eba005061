"""Shared helpers for API tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from reliva.sources.http import UpstreamError


@dataclass(slots=True)
class RecordedCall:
    method: str
    url: str
    params: dict[str, Any]
    headers: dict[str, str]
    json_body: Any = None


@dataclass(slots=True)
class _Route:
    method: str
    url: str
    params: dict[str, Any]
    payload: Any
    status: int


@dataclass
class FakeUpstream:
    """Stand-in for ``fetch_json``: canned responses keyed by method, URL and params.

    Unmatched requests fail like an upstream 404.
    """

    routes: list[_Route] = field(default_factory=list)
    calls: list[RecordedCall] = field(default_factory=list)

    def add(
        self,
        url: str,
        payload: Any = None,
        *,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        status: int = 200,
    ) -> None:
        self.routes.append(_Route(method=method, url=url, params=params or {}, payload=payload, status=status))

    def urls(self) -> list[str]:
        return [call.url for call in self.calls]

    async def __call__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        method: str = "GET",
        json_body: Any | None = None,
        content: Any | None = None,
        timeout: float | None = None,
    ) -> Any:
        params = params or {}
        self.calls.append(
            RecordedCall(method=method, url=url, params=dict(params), headers=dict(headers or {}), json_body=json_body)
        )
        for route in self.routes:
            if route.method != method or route.url != url:
                continue
            if any(params.get(key) != value for key, value in route.params.items()):
                continue
            if route.status >= 400:
                raise UpstreamError(f"Upstream responded with status {route.status}", status_code=route.status)
            return route.payload
        raise UpstreamError("Upstream responded with status 404", status_code=404)
