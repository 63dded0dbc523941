# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Select the prober matching a probe's handler kind."""

from __future__ import annotations

from ..config import ProbeSettings
from ..http.client import HttpClient, create_default_http_client
from ..models.spec import ProbeSpec
from .base import Prober
from .http_get import HttpGetProber
from .tcp_socket import TCPSocketProber


class ProberRegistry:
    """Lazily builds one prober per handler kind and hands out the right one."""

    def __init__(
        self,
        *,
        settings: ProbeSettings | None = None,
        http_client: HttpClient | None = None,
        http_prober: Prober | None = None,
        tcp_prober: Prober | None = None,
    ):
        self.settings = settings
        self.http_client = http_client
        self._owned_client: HttpClient | None = None
        self._http_prober = http_prober
        self._tcp_prober = tcp_prober

    @property
    def http_prober(self) -> Prober:
        if self._http_prober is None:
            if self.http_client is None:
                self._owned_client = self.http_client = create_default_http_client(self.settings)
            self._http_prober = HttpGetProber(http_client=self.http_client, settings=self.settings)
        return self._http_prober

    @property
    def tcp_prober(self) -> Prober:
        if self._tcp_prober is None:
            self._tcp_prober = TCPSocketProber(settings=self.settings)
        return self._tcp_prober

    def prober_for(self, spec: ProbeSpec) -> Prober:
        if spec.http_get is not None:
            return self.http_prober
        return self.tcp_prober

    def close(self) -> None:
        """Close the HTTP client if this registry created it."""
        if self._owned_client is not None:
            self._owned_client.close()
            self._owned_client = None
            self.http_client = None
            self._http_prober = None


def prober_for(spec: ProbeSpec, *, settings: ProbeSettings | None = None, http_client: HttpClient | None = None) -> Prober:
    """
    Return a fresh prober for ``spec``'s handler kind.

    Without ``http_client`` an HTTP prober gets its own httpx client, which the
    caller closes through ``prober.http_client.close()``.
    """
    return ProberRegistry(settings=settings, http_client=http_client).prober_for(spec)


__all__ = ["ProberRegistry", "prober_for"]
