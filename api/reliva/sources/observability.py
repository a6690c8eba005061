"""Call accounting for source adapters.

Every adapter call passes through ``SourceMonitor.track``, which times it,
counts the outcome per ``(source, operation)`` and writes one JSON log line.
The monitor only observes: it never skips, reorders or retries a call.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable

from reliva.utils.redaction import redact_secrets

REPEATED_FAILURE_THRESHOLD = 3

logger = logging.getLogger("reliva.sources")


@dataclass
class CallStats:
    started: int = 0
    succeeded: int = 0
    failed: int = 0
    last_latency_ms: float | None = None
    last_error: str | None = None
    last_status: int | None = None


class SourceMonitor:
    def __init__(self) -> None:
        self._stats: dict[tuple[str, str], CallStats] = {}
        self._lock = asyncio.Lock()

    async def _begin(self, key: tuple[str, str]) -> None:
        async with self._lock:
            self._stats.setdefault(key, CallStats()).started += 1

    async def _finish(
        self, key: tuple[str, str], latency_ms: float, *, error: str | None = None, status: int | None = None
    ) -> None:
        async with self._lock:
            stats = self._stats[key]
            if error is None:
                stats.succeeded += 1
            else:
                stats.failed += 1
            stats.last_latency_ms = latency_ms
            stats.last_error = error
            stats.last_status = status

    async def track(
        self,
        source: str,
        operation: str,
        func: Callable[[], Awaitable[Any]],
        *,
        context: dict[str, Any] | None = None,
    ) -> Any:
        """Await ``func`` and record its outcome; exceptions are re-raised as-is."""
        key = (source, operation)
        event: dict[str, Any] = {"source": source, "operation": operation, "context": context or {}}
        await self._begin(key)
        started_at = time.perf_counter()
        try:
            result = await func()
        except Exception as exc:  # noqa: BLE001
            latency_ms = (time.perf_counter() - started_at) * 1000
            error = redact_secrets(str(exc)) or type(exc).__name__
            status = getattr(exc, "status_code", None)
            await self._finish(key, latency_ms, error=error, status=status)
            event.update(
                event="source_call_failure",
                error=error,
                status=status,
                body=getattr(exc, "body", None) or None,
                latency_ms=round(latency_ms, 2),
            )
            logger.warning(json.dumps(event, default=str))
            raise
        latency_ms = (time.perf_counter() - started_at) * 1000
        await self._finish(key, latency_ms)
        event.update(event="source_call_success", latency_ms=round(latency_ms, 2))
        logger.info(json.dumps(event, default=str))
        return result

    async def snapshot(self) -> dict[str, Any]:
        """``{source: {"operations": {operation: stats}}}`` for every call seen so far."""
        async with self._lock:
            view: dict[str, Any] = {}
            for (source, operation), stats in sorted(self._stats.items()):
                view.setdefault(source, {"operations": {}})["operations"][operation] = asdict(stats)
            return view

    async def reset(self) -> None:
        async with self._lock:
            self._stats.clear()


def summarize(snapshot: dict[str, Any]) -> dict[str, Any]:
    """Reduce a snapshot to a per-source state and a flat list of issues.

    A source is degraded when any operation's last call failed, or when one
    operation has failed ``REPEATED_FAILURE_THRESHOLD`` times or more.
    """
    sources: dict[str, Any] = {}
    issues: list[dict[str, Any]] = []
    for source, payload in snapshot.items():
        operations: dict[str, Any] = payload.get("operations") or {}
        source_issues: list[dict[str, Any]] = []
        for operation, stats in operations.items():
            if stats.get("last_error"):
                source_issues.append(
                    {"source": source, "operation": operation, "reason": "last_error", "error": stats["last_error"]}
                )
        counts = {operation: int(stats.get("failed") or 0) for operation, stats in operations.items()}
        worst = max(counts, key=counts.__getitem__, default=None)
        if worst is not None and counts[worst] >= REPEATED_FAILURE_THRESHOLD:
            source_issues.append(
                {"source": source, "operation": worst, "reason": "repeated_failures", "failed": counts[worst]}
            )
        issues.extend(source_issues)
        sources[source] = {
            "state": "degraded" if source_issues else "ok",
            "failed": sum(counts.values()),
            "operations": operations,
        }
    return {"sources": sources, "issues": issues}


source_monitor = SourceMonitor()
