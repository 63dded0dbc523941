# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
readyprobe package entrypoint.

Decides whether a freshly started workload instance is ready for traffic by
polling an HTTP GET or TCP connect readiness probe against its endpoint until
it succeeds, fails with a transport error, or the attempt budget runs out.
HTTP behavior is abstracted behind an injectable client interface, and probe
specifications are modeled with typed dataclasses.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import (
    ErrorCategory,
    InvalidSpecError,
    ProbeError,
    ResolutionError,
    TransportError,
    UnsupportedPortTypeError,
    UnsupportedSchemeError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import (
    Endpoint,
    HTTPGetAction,
    PollOutcome,
    PollResult,
    PortSpec,
    PortType,
    ProbeResult,
    ProbeSpec,
    TCPSocketAction,
)
from .poller import Poller, PollPolicy, poll
from .probes import HttpGetProber, TCPSocketProber, prober_for, resolve_address
from .runtime import ReadinessChecker
from .version import __version__

__all__ = [
    "Endpoint",
    "ErrorCategory",
    "HTTPGetAction",
    "HttpClient",
    "HttpGetProber",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidSpecError",
    "PollOutcome",
    "PollPolicy",
    "PollResult",
    "Poller",
    "PortSpec",
    "PortType",
    "ProbeError",
    "ProbeResult",
    "ProbeSettings",
    "ProbeSpec",
    "ReadinessChecker",
    "ResolutionError",
    "TCPSocketAction",
    "TCPSocketProber",
    "TransportError",
    "UnsupportedPortTypeError",
    "UnsupportedSchemeError",
    "create_default_http_client",
    "load_probe_settings",
    "poll",
    "prober_for",
    "resolve_address",
    "setup_logging",
    "__version__",
]
