# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Readiness probers and address resolution."""

from .address import dial_target, lookup_port, resolve_address, split_address
from .base import Prober
from .http_get import HttpGetProber
from .registry import ProberRegistry, prober_for
from .tcp_socket import TCPSocketProber

__all__ = [
    "HttpGetProber",
    "Prober",
    "ProberRegistry",
    "TCPSocketProber",
    "dial_target",
    "lookup_port",
    "prober_for",
    "resolve_address",
    "split_address",
]
