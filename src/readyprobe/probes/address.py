# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turn a probe's host and port into a dialable address."""

from __future__ import annotations

import socket

from ..errors import ResolutionError, UnsupportedPortTypeError
from ..models.spec import PortSpec, PortType


def resolve_address(host: str, port: PortSpec) -> str:
    """
    Join host and port into ``host:port``.

    Numeric ports are formatted directly, named ports are kept as the service
    token for the transport to look up. IPv6 literals get brackets.
    """
    if port.type == PortType.INT:
        token = str(int(port.int_val))
    elif port.type == PortType.STRING:
        token = port.str_val
    else:
        raise UnsupportedPortTypeError(port.type)

    host = host or ""
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"{host}:{token}"


def split_address(address: str) -> tuple[str, str]:
    """Inverse of :func:`resolve_address`."""
    host, sep, token = address.rpartition(":")
    if not sep:
        raise ResolutionError(f"missing port in address {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, token


def lookup_port(token: str, protocol: str = "tcp") -> int:
    """Resolve a port token (number or service name) to a port number."""
    if token.isdigit():
        return int(token)
    if not token:
        raise ResolutionError("empty port")
    try:
        return socket.getservbyname(token, protocol)
    except OSError as exc:
        raise ResolutionError(f"unknown {protocol} service port {token!r}") from exc


def dial_target(address: str, protocol: str = "tcp") -> tuple[str, int]:
    host, token = split_address(address)
    return host, lookup_port(token, protocol)


__all__ = ["dial_target", "lookup_port", "resolve_address", "split_address"]
