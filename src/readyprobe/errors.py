# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class ProbeError(Exception):
    """Base class for every failure reported by a probe."""


class InvalidSpecError(ProbeError):
    """The probe specification is missing or malformed."""


class ResolutionError(ProbeError):
    """Host/port could not be turned into a dialable address."""


class UnsupportedPortTypeError(ResolutionError):
    def __init__(self, port_type: object):
        super().__init__("unsupported port type %s" % (port_type,))
        self.port_type = port_type


class UnsupportedSchemeError(ProbeError):
    def __init__(self, scheme: object):
        super().__init__(f"unsupported scheme {scheme!r}")
        self.scheme = scheme


class TransportError(ProbeError):
    """Network-layer failure during an actual probe attempt."""

    def __init__(self, message: str, *, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR, error_type: str | None = None):
        super().__init__(message)
        self.category = category
        self.error_type = error_type

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


def _exception_chain(exc: BaseException):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps the socket-level error (e.g. ``socket.gaierror``) several layers
    deep, so the whole cause chain is inspected before falling back to the
    outermost exception type.
    """
    chain = list(_exception_chain(exc))

    for item in chain:
        if isinstance(item, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    for item in chain:
        if isinstance(item, (httpx.TimeoutException, socket.timeout, TimeoutError)):
            return ErrorCategory.TIMEOUT

    for item in chain:
        if isinstance(item, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
            return ErrorCategory.CONNECTION_ERROR
        if isinstance(item, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
            return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.CONNECTION_ERROR: "Connection refused or reset",
        ErrorCategory.DNS_ERROR: "Host resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


def transport_error_from_exception(exc: BaseException) -> TransportError:
    error = TransportError(str(exc) or type(exc).__name__, category=categorize_exception(exc), error_type=type(exc).__name__)
    error.__cause__ = exc
    return error


__all__ = [
    "ErrorCategory",
    "InvalidSpecError",
    "ProbeError",
    "ResolutionError",
    "TransportError",
    "UnsupportedPortTypeError",
    "UnsupportedSchemeError",
    "categorize_exception",
    "error_category_to_reason",
    "transport_error_from_exception",
]
