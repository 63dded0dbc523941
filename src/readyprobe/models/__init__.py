# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for readyprobe."""

from .result import PollOutcome, PollResult, ProbeResult
from .spec import (
    DEFAULT_SCHEME,
    Endpoint,
    HTTPGetAction,
    PortSpec,
    PortType,
    ProbeAction,
    ProbeSpec,
    TCPSocketAction,
)

__all__ = [
    "DEFAULT_SCHEME",
    "Endpoint",
    "HTTPGetAction",
    "PollOutcome",
    "PollResult",
    "PortSpec",
    "PortType",
    "ProbeAction",
    "ProbeResult",
    "ProbeSpec",
    "TCPSocketAction",
]
