# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Polling controller: repeat a readiness probe until ready, failed or exhausted."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from .config import ProbeSettings, load_probe_settings
from .errors import InvalidSpecError, ProbeError
from .http.client import HttpClient
from .models.result import PollOutcome, PollResult, ProbeResult
from .models.spec import Endpoint, ProbeSpec
from .probes.base import Prober
from .probes.registry import ProberRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollPolicy:
    """Attempt budget and fixed spacing for one polling cycle."""

    max_attempts: int = 60
    interval: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.interval < 0:
            raise ValueError("interval must not be negative")

    @classmethod
    def from_settings(cls, settings: ProbeSettings) -> PollPolicy:
        return cls(max_attempts=max(1, settings.max_attempts), interval=max(0.0, settings.interval))


class Poller:
    """
    Drives repeated probes against one endpoint per call.

    Each call to :meth:`poll` is an isolated cycle with no state shared across
    calls, so one Poller may serve concurrent cycles for different endpoints
    as long as the injected probers are themselves thread-safe.
    """

    def __init__(
        self,
        *,
        policy: PollPolicy | None = None,
        settings: ProbeSettings | None = None,
        http_client: HttpClient | None = None,
        registry: ProberRegistry | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or load_probe_settings()
        self.policy = policy or PollPolicy.from_settings(self.settings)
        self._owns_registry = registry is None
        self.registry = registry or ProberRegistry(settings=self.settings, http_client=http_client)
        self._sleep = sleep
        self._clock = clock

    def poll(
        self,
        spec: ProbeSpec | None,
        endpoint: Endpoint,
        *,
        policy: PollPolicy | None = None,
        cancel: threading.Event | None = None,
    ) -> PollResult:
        policy = policy or self.policy
        started = self._clock()

        if spec is None:
            error = InvalidSpecError("readiness probe cannot be nil")
            logger.error("error while checking probe for endpoint %s: %s", endpoint, error)
            return PollResult(PollOutcome.FAILED, attempts=0, endpoint=endpoint, error=error)

        prober = self.registry.prober_for(spec)
        action = spec.targeting(endpoint)

        attempt = 1
        while True:
            if cancel is not None and cancel.is_set():
                return self._finish(PollOutcome.CANCELLED, attempt - 1, endpoint, started)

            result = self._attempt(prober, action)
            if result.error is not None:
                logger.error("error while checking probe: %s", result.error)
                return self._finish(PollOutcome.FAILED, attempt, endpoint, started, error=result.error)
            if result.ready:
                return self._finish(PollOutcome.READY, attempt, endpoint, started)
            if attempt >= policy.max_attempts:
                return self._finish(PollOutcome.EXHAUSTED, attempt, endpoint, started)

            if cancel is not None:
                if cancel.wait(policy.interval):
                    return self._finish(PollOutcome.CANCELLED, attempt, endpoint, started)
            else:
                self._sleep(policy.interval)
            attempt += 1

    def close(self) -> None:
        """Release the HTTP client the Poller's own registry created, if any."""
        if self._owns_registry:
            self.registry.close()

    def __enter__(self) -> Poller:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    @staticmethod
    def _attempt(prober: Prober, action) -> ProbeResult:  # noqa: ANN001
        try:
            return prober.check_probe(action)
        except ProbeError as exc:
            return ProbeResult.failed(exc)
        except Exception as exc:  # noqa: BLE001
            error = ProbeError(f"{type(exc).__name__}: {exc}")
            error.__cause__ = exc
            return ProbeResult.failed(error)

    def _finish(
        self,
        outcome: PollOutcome,
        attempts: int,
        endpoint: Endpoint,
        started: float,
        *,
        error: ProbeError | None = None,
    ) -> PollResult:
        logger.info("took %d probe retries for readiness of endpoint %s (%s)", attempts, endpoint, outcome.value)
        return PollResult(
            outcome=outcome,
            attempts=attempts,
            endpoint=endpoint,
            error=error,
            elapsed=self._clock() - started,
        )


def poll(
    spec: ProbeSpec | None,
    endpoint: Endpoint,
    *,
    policy: PollPolicy | None = None,
    cancel: threading.Event | None = None,
    http_client: HttpClient | None = None,
    settings: ProbeSettings | None = None,
) -> PollResult:
    """Run one polling cycle with default probers."""
    with Poller(policy=policy, settings=settings, http_client=http_client) as poller:
        return poller.poll(spec, endpoint, cancel=cancel)


__all__ = ["PollPolicy", "Poller", "poll"]
