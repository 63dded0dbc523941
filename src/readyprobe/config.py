# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for readyprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"readyprobe/{__version__}"
DEFAULT_MAX_ATTEMPTS = 60
DEFAULT_INTERVAL = 1.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class ProbeSettings:
    """Polling policy and transport defaults.

    ``http_timeout`` and ``connect_timeout`` stay ``None`` unless configured, in
    which case the transport defaults apply (httpx's own timeout for HTTP, the
    operating system's connect timeout for TCP).
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    interval: float = DEFAULT_INTERVAL
    http_timeout: float | None = None
    connect_timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    trust_env: bool = False

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_attempts = _int_env("READYPROBE_MAX_ATTEMPTS", cls.max_attempts)
        if max_attempts <= 0:
            max_attempts = cls.max_attempts
        interval = _float_env("READYPROBE_INTERVAL", cls.interval)
        if interval < 0:
            interval = cls.interval
        return cls(
            max_attempts=max_attempts,
            interval=interval,
            http_timeout=_optional_float_env("READYPROBE_HTTP_TIMEOUT", cls.http_timeout),
            connect_timeout=_optional_float_env("READYPROBE_CONNECT_TIMEOUT", cls.connect_timeout),
            user_agent=os.getenv("READYPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("READYPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            trust_env=_bool_env("READYPROBE_HTTP_TRUST_ENV", cls.trust_env),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
