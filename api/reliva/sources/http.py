from __future__ import annotations

from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential_jitter

from reliva.core.config import settings
from reliva.utils.redaction import redact_secrets, truncate


class UpstreamError(Exception):
    """Transport-level failure: non-2xx status, network error, timeout or bad JSON."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(redact_secrets(message))
        self.status_code = status_code
        self.body = redact_secrets(truncate(body))

    @property
    def retryable(self) -> bool:
        return self.status_code is None or self.status_code >= 500


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, UpstreamError) and exc.retryable


async def fetch_json(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    method: str = "GET",
    json_body: Any | None = None,
    content: str | bytes | None = None,
    timeout: float | None = None,
) -> Any:
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max(settings.upstream_max_attempts, 1)),
        wait=wait_exponential_jitter(initial=1, max=8),
        retry=retry_if_exception(_is_retryable),
        reraise=True,
    ):
        with attempt:
            try:
                async with httpx.AsyncClient(timeout=timeout or settings.http_timeout_seconds) as client:
                    response = await client.request(
                        method, url, headers=headers, params=params, json=json_body, content=content
                    )
            except httpx.TimeoutException as exc:
                raise UpstreamError(f"Timed out calling {url}") from exc
            except httpx.HTTPError as exc:
                raise UpstreamError(f"{type(exc).__name__} calling {url}: {exc}") from exc
            if response.status_code >= 400:
                raise UpstreamError(
                    f"Upstream responded with status {response.status_code}",
                    status_code=response.status_code,
                    body=response.text,
                )
            try:
                return response.json()
            except ValueError as exc:
                raise UpstreamError(
                    "Upstream returned invalid JSON", status_code=response.status_code, body=response.text
                ) from exc
    raise UpstreamError("Unreachable")
