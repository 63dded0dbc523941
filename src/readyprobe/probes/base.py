# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Prober protocol shared by every readiness check kind."""

from typing import Protocol

from ..models.result import ProbeResult
from ..models.spec import ProbeAction


class Prober(Protocol):
    """Runs one readiness check against an already-targeted probe handler."""

    name: str

    def check_probe(self, spec: ProbeAction | None) -> ProbeResult: ...
