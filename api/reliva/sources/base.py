"""Base adapter primitives for external content providers."""

from __future__ import annotations

from typing import Any

from reliva.core.errors import NotConfiguredError
from reliva.sources.http import fetch_json
from reliva.sources.observability import source_monitor
from reliva.utils.redaction import redact_secrets


class SourceAdapter:
    """One external provider. Every operation issues exactly one request."""
    source_name: str

    async def _request(
        self,
        operation: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        method: str = "GET",
        json_body: Any | None = None,
        content: str | bytes | None = None,
    ) -> Any:
        """Issue one tracked call and return the decoded JSON body."""
        async def _call() -> Any:
            return await fetch_json(
                url,
                headers=headers,
                params=params,
                method=method,
                json_body=json_body,
                content=content,
            )

        return await source_monitor.track(
            self.source_name,
            operation,
            _call,
            context={"url": redact_secrets(url), "method": method},
        )

    @staticmethod
    def _require(value: str | None, message: str) -> str:
        """Fail before any network call when a credential is missing."""
        if not value:
            raise NotConfiguredError(message)
        return value
