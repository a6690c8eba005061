"""MusicAPI adapter with an injectable bearer-token cache.

The token cache is the one piece of process-lifetime state in the resolution
layer. It is read and then conditionally written without a lock, so
concurrent requests that all observe an expired token each fetch a new one;
the last writer wins and the duplicates are harmless.
"""

from __future__ import annotations

import base64
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

from reliva.core.config import settings
from reliva.sources.base import SourceAdapter
from reliva.sources.http import UpstreamError

API_BASE = "https://api.musicapi.com"
TOKEN_URL = f"{API_BASE}/auth/token"
TOKEN_SAFETY_MARGIN_SECONDS = 300
DEFAULT_TOKEN_LIFETIME_SECONDS = 3600
NOT_CONFIGURED_MESSAGE = (
    "MusicAPI credentials not configured. Please add MUSICAPI_CLIENT_ID and "
    "MUSICAPI_CLIENT_SECRET to your environment variables."
)


@dataclass
class TokenCache:
    """Cached bearer token and the epoch millisecond after which it is stale."""
    token: str | None = None
    expires_at_epoch_ms: int = 0

    def valid_token(self, now_ms: int) -> str | None:
        if self.token and self.expires_at_epoch_ms > now_ms:
            return self.token
        return None

    def store(self, token: str, expires_in_seconds: int, now_ms: int) -> None:
        self.token = token
        self.expires_at_epoch_ms = now_ms + (expires_in_seconds - TOKEN_SAFETY_MARGIN_SECONDS) * 1000


class MusicAPIAdapter(SourceAdapter):
    """Spotify catalogue access through MusicAPI."""
    source_name = "musicapi"

    def __init__(
        self,
        token_cache: TokenCache | None = None,
        *,
        client_id: str | None = None,
        client_secret: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.token_cache = token_cache if token_cache is not None else TokenCache()
        self._client_id = client_id
        self._client_secret = client_secret
        self._clock = clock

    @property
    def client_id(self) -> str | None:
        return self._client_id or settings.musicapi_client_id

    @property
    def client_secret(self) -> str | None:
        return self._client_secret or settings.musicapi_client_secret

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _credentials(self) -> tuple[str, str]:
        client_id = self._require(self.client_id, NOT_CONFIGURED_MESSAGE)
        client_secret = self._require(self.client_secret, NOT_CONFIGURED_MESSAGE)
        return client_id, client_secret

    async def ensure_token(self) -> str:
        """Return the cached token, fetching a new one when absent or expired."""
        client_id, client_secret = self._credentials()
        cached = self.token_cache.valid_token(self._now_ms())
        if cached:
            return cached
        data = await self._request(
            "token",
            TOKEN_URL,
            headers={"Content-Type": "application/json"},
            method="POST",
            json_body={
                "client_id": client_id,
                "client_secret": client_secret,
                "grant_type": "client_credentials",
            },
        )
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise UpstreamError("MusicAPI token response did not include an access token")
        expires_value = data.get("expires_in")
        try:
            expires_in = int(expires_value)
        except (TypeError, ValueError, OverflowError):
            expires_in = DEFAULT_TOKEN_LIFETIME_SECONDS
        self.token_cache.store(token, expires_in, self._now_ms())
        return token

    def _basic_auth(self) -> str:
        client_id, client_secret = self._credentials()
        encoded = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    async def track_preview(self, track_id: str) -> Any:
        """Fetch preview url, name and artists for a Spotify track id."""
        token = await self.ensure_token()
        return await self._request(
            "track_preview",
            f"{API_BASE}/spotify/tracks/{quote(track_id, safe='')}",
            headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
            params={"fields": "preview_url,name,artists"},
        )

    async def search(self, query: str, *, kind: str = "track", limit: int | str = 10) -> Any:
        return await self._request(
            "search",
            f"{API_BASE}/spotify/search",
            headers={"Authorization": self._basic_auth(), "Content-Type": "application/json"},
            params={"q": query, "type": kind, "limit": limit},
        )
