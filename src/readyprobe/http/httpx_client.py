# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

from typing import Any

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    Every request uses its own connection: keep-alive is disabled on the pool
    and ``Connection: close`` is sent, so no socket outlives its attempt.
    """

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_probe_settings()
        client_kwargs: dict[str, Any] = {
            "follow_redirects": self.settings.allow_redirects,
            "trust_env": self.settings.trust_env,
            "limits": httpx.Limits(max_keepalive_connections=0),
        }
        if self.settings.http_timeout is not None:
            client_kwargs["timeout"] = self.settings.http_timeout
        self._client = client or httpx.Client(**client_kwargs)

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        headers.setdefault("Connection", "close")

        stream_kwargs: dict[str, Any] = {
            "headers": headers,
            "follow_redirects": request.allow_redirects,
        }
        if request.timeout is not None:
            stream_kwargs["timeout"] = request.timeout

        try:
            # Only the status line and headers matter; the body is never read.
            with self._client.stream(request.method, request.url, **stream_kwargs) as resp:
                return HttpResponse(
                    ok=True,
                    status_code=resp.status_code,
                    headers=dict(resp.headers),
                    url=str(resp.url),
                )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc).value,
            )

    def close(self) -> None:
        self._client.close()
