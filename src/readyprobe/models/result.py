# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe and polling outcome models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ProbeError, TransportError
from .spec import Endpoint


@dataclass
class ProbeResult:
    """
    Outcome of a single probe attempt.

    ``ready=False`` with no error means "not ready yet" and is retryable; an
    attached error is fatal to the current polling cycle.
    """

    ready: bool
    error: ProbeError | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failed(cls, error: ProbeError, **metadata: Any) -> ProbeResult:
        return cls(ready=False, error=error, metadata=dict(metadata))

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class PollOutcome(str, Enum):
    READY = "ready"
    FAILED = "failed"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


@dataclass
class PollResult:
    outcome: PollOutcome
    attempts: int
    endpoint: Endpoint | None = None
    error: ProbeError | None = None
    elapsed: float = 0.0

    @property
    def ready(self) -> bool:
        return self.outcome is PollOutcome.READY

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "outcome": self.outcome.value,
            "ready": self.ready,
            "attempts": self.attempts,
            "endpoint": str(self.endpoint) if self.endpoint is not None else None,
            "elapsed": round(self.elapsed, 3),
            "error": None,
        }
        if self.error is not None:
            error: dict[str, Any] = {"type": type(self.error).__name__, "message": str(self.error)}
            if isinstance(self.error, TransportError):
                error["category"] = self.error.category.value
                error["reason"] = self.error.reason
            data["error"] = error
        return data
