# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""TCP connect readiness prober."""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import InvalidSpecError, ResolutionError, transport_error_from_exception
from ..models.result import ProbeResult
from ..models.spec import TCPSocketAction
from .address import dial_target, resolve_address

logger = logging.getLogger(__name__)

Connector = Callable[..., Any]


class TCPSocketProber:
    """Ready as soon as a TCP connection to the probe address succeeds."""

    name = "tcpSocket"

    def __init__(self, settings: ProbeSettings | None = None, connect: Connector = socket.create_connection):
        self.settings = settings or load_probe_settings()
        self._connect = connect

    def check_probe(self, spec: TCPSocketAction | None) -> ProbeResult:
        if spec is None:
            return ProbeResult.failed(InvalidSpecError("probe cannot be nil"))
        if not isinstance(spec, TCPSocketAction):
            return ProbeResult.failed(InvalidSpecError(f"expected tcpSocket handler, got {type(spec).__name__}"))

        try:
            address = resolve_address(spec.host, spec.port)
            target = dial_target(address, "tcp")
        except ResolutionError as exc:
            return ProbeResult.failed(exc)

        logger.info("checking probe address: %s", address)
        try:
            conn = self._connect(target, timeout=self.settings.connect_timeout)
        except OSError as exc:
            return ProbeResult.failed(transport_error_from_exception(exc), address=address)
        conn.close()
        return ProbeResult(ready=True, metadata={"address": address})


__all__ = ["TCPSocketProber"]
