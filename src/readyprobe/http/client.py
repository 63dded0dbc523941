# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction used by the HTTP-GET prober."""

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Issues one request per call.

    Implementations never raise for network failures: they return an
    ``HttpResponse`` with ``ok=False`` and the error fields filled in, which the
    prober turns into a ``TransportError``.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def create_default_http_client(settings: ProbeSettings | None = None) -> HttpClient:
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_probe_settings())
