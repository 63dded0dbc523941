# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level readiness facade for orchestrators."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from contextlib import suppress
from typing import Any

from .config import ProbeSettings, load_probe_settings
from .errors import InvalidSpecError
from .http.client import HttpClient, create_default_http_client
from .models import Endpoint, PollOutcome, PollResult, ProbeResult, ProbeSpec
from .poller import Poller, PollPolicy
from .probes.registry import ProberRegistry


class ReadinessChecker:
    """
    Convenience wrapper that wires one HTTP client and one set of probers
    across readiness checks.

    Orchestrators typically keep a single instance and call :meth:`check` for
    every newly started endpoint.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: ProbeSettings | None = None,
        policy: PollPolicy | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.registry = ProberRegistry(settings=self.settings, http_client=self.http_client)
        self.poller = Poller(policy=policy, settings=self.settings, registry=self.registry)

    def check(
        self,
        spec: ProbeSpec | None,
        endpoint: Endpoint,
        *,
        policy: PollPolicy | None = None,
        cancel: threading.Event | None = None,
    ) -> PollResult:
        return self.poller.poll(spec, endpoint, policy=policy, cancel=cancel)

    def check_probe_mapping(
        self,
        probe: Mapping[str, Any] | None,
        endpoint: Endpoint,
        *,
        policy: PollPolicy | None = None,
        cancel: threading.Event | None = None,
    ) -> PollResult:
        """Run a polling cycle for a declarative ``readinessProbe`` mapping."""
        try:
            spec = ProbeSpec.from_mapping(probe)
        except InvalidSpecError as exc:
            return PollResult(PollOutcome.FAILED, attempts=0, endpoint=endpoint, error=exc)
        return self.check(spec, endpoint, policy=policy, cancel=cancel)

    def check_once(self, spec: ProbeSpec, endpoint: Endpoint) -> ProbeResult:
        """Run a single probe attempt without retries."""
        return self.registry.prober_for(spec).check_probe(spec.targeting(endpoint))

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> ReadinessChecker:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
