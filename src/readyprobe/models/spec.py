# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Readiness probe specification models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any

from ..errors import InvalidSpecError

DEFAULT_SCHEME = "HTTP"


class PortType(IntEnum):
    INT = 0
    STRING = 1


@dataclass(frozen=True)
class PortSpec:
    """Port given either as a number or as a named/service port.

    ``type`` is deliberately typed loosely: values that are neither
    ``PortType.INT`` nor ``PortType.STRING`` are kept as-is so address
    resolution can reject them.
    """

    type: PortType | int = PortType.INT
    int_val: int = 0
    str_val: str = ""

    @classmethod
    def from_int(cls, value: int) -> PortSpec:
        return cls(type=PortType.INT, int_val=int(value))

    @classmethod
    def from_str(cls, value: str) -> PortSpec:
        return cls(type=PortType.STRING, str_val=str(value))

    @classmethod
    def parse(cls, value: Any) -> PortSpec:
        """Build a PortSpec from an int-or-string value as found in probe mappings."""
        if isinstance(value, PortSpec):
            return value
        if isinstance(value, bool):
            raise InvalidSpecError(f"invalid port value {value!r}")
        if isinstance(value, int):
            return cls.from_int(value)
        if isinstance(value, str) and value.strip():
            return cls.from_str(value.strip())
        raise InvalidSpecError(f"invalid port value {value!r}")

    def __str__(self) -> str:
        if self.type == PortType.INT:
            return str(self.int_val)
        if self.type == PortType.STRING:
            return self.str_val
        return f"<port type {self.type}>"


@dataclass(frozen=True)
class HTTPGetAction:
    host: str = ""
    port: PortSpec = PortSpec()
    path: str = "/"
    scheme: str = DEFAULT_SCHEME


@dataclass(frozen=True)
class TCPSocketAction:
    host: str = ""
    port: PortSpec = PortSpec()


ProbeAction = HTTPGetAction | TCPSocketAction


@dataclass(frozen=True)
class Endpoint:
    """Concrete network location the orchestrator wants checked."""

    fqdn: str
    port: int

    def __str__(self) -> str:
        return f"{self.fqdn}:{self.port}"


@dataclass(frozen=True)
class ProbeSpec:
    """Readiness probe carrying exactly one handler."""

    http_get: HTTPGetAction | None = None
    tcp_socket: TCPSocketAction | None = None

    def __post_init__(self) -> None:
        if self.http_get is None and self.tcp_socket is None:
            raise InvalidSpecError("probe must define one of httpGet or tcpSocket")
        if self.http_get is not None and self.tcp_socket is not None:
            raise InvalidSpecError("probe must define only one of httpGet or tcpSocket")

    @property
    def kind(self) -> str:
        return "httpGet" if self.http_get is not None else "tcpSocket"

    @property
    def action(self) -> ProbeAction:
        return self.http_get if self.http_get is not None else self.tcp_socket  # type: ignore[return-value]

    def targeting(self, endpoint: Endpoint) -> ProbeAction:
        """Return the handler with the endpoint's host and numeric port overlaid."""
        return replace(self.action, host=endpoint.fqdn, port=PortSpec.from_int(endpoint.port))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ProbeSpec:
        """
        Build a ProbeSpec from a declarative readiness probe mapping.

        Accepts the container ``readinessProbe`` shape::

            {"httpGet": {"path": "/health", "port": 8080, "scheme": "HTTP"}}
            {"tcpSocket": {"port": "http"}}
        """
        if data is None:
            raise InvalidSpecError("probe cannot be nil")
        if not isinstance(data, Mapping):
            raise InvalidSpecError(f"probe must be a mapping, got {type(data).__name__}")

        http_raw = data.get("httpGet")
        tcp_raw = data.get("tcpSocket")
        http_get = None
        tcp_socket = None

        if http_raw is not None:
            if not isinstance(http_raw, Mapping):
                raise InvalidSpecError("httpGet must be a mapping")
            http_get = HTTPGetAction(
                host=str(http_raw.get("host") or ""),
                port=PortSpec.parse(http_raw.get("port")),
                path=str(http_raw.get("path") or "/"),
                scheme=str(http_raw.get("scheme") or DEFAULT_SCHEME),
            )
        if tcp_raw is not None:
            if not isinstance(tcp_raw, Mapping):
                raise InvalidSpecError("tcpSocket must be a mapping")
            tcp_socket = TCPSocketAction(
                host=str(tcp_raw.get("host") or ""),
                port=PortSpec.parse(tcp_raw.get("port")),
            )
        return cls(http_get=http_get, tcp_socket=tcp_socket)
