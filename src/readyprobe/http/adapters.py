# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Iterable

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Programmable HttpClient for tests and dry runs.

    Each URL maps to a queue of responses; the last one repeats once the queue
    is drained, so "503, 503, 200" scripts a workload that becomes ready on the
    third probe.
    """

    def __init__(self, responses: dict[str, HttpResponse | Iterable[HttpResponse]] | None = None):
        self._responses: dict[str, list[HttpResponse]] = {}
        self.requests: list[HttpRequest] = []
        for url, response in (responses or {}).items():
            self.add(url, response)

    def add(self, url: str, response: HttpResponse | Iterable[HttpResponse]) -> None:
        queue = [response] if isinstance(response, HttpResponse) else list(response)
        self._responses.setdefault(url, []).extend(queue)

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        queue = self._responses.get(request.url)
        if not queue:
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message="No stubbed response configured",
                error_type="LookupError",
            )
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def close(self) -> None:
        return None
