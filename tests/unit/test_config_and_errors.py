# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket

import httpx

from readyprobe import config
from readyprobe.config import DEFAULT_USER_AGENT
from readyprobe.errors import (
    ErrorCategory,
    ResolutionError,
    TransportError,
    UnsupportedPortTypeError,
    categorize_exception,
    error_category_to_reason,
    transport_error_from_exception,
)


def test_probe_settings_defaults(monkeypatch):
    for name in (
        "READYPROBE_MAX_ATTEMPTS",
        "READYPROBE_INTERVAL",
        "READYPROBE_HTTP_TIMEOUT",
        "READYPROBE_CONNECT_TIMEOUT",
        "READYPROBE_USER_AGENT",
        "READYPROBE_HTTP_REDIRECTS",
        "READYPROBE_HTTP_TRUST_ENV",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = config.load_probe_settings()
    assert settings.max_attempts == 60
    assert settings.interval == 1.0
    assert settings.http_timeout is None
    assert settings.connect_timeout is None
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.allow_redirects is True
    assert settings.trust_env is False


def test_probe_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("READYPROBE_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("READYPROBE_INTERVAL", "0.5")
    monkeypatch.setenv("READYPROBE_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("READYPROBE_CONNECT_TIMEOUT", "1")
    monkeypatch.setenv("READYPROBE_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("READYPROBE_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("READYPROBE_HTTP_TRUST_ENV", "yes")

    settings = config.load_probe_settings()

    assert settings.max_attempts == 5
    assert settings.interval == 0.5
    assert settings.http_timeout == 2.5
    assert settings.connect_timeout == 1.0
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.trust_env is True


def test_probe_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("READYPROBE_MAX_ATTEMPTS", "ten")
    monkeypatch.setenv("READYPROBE_INTERVAL", "-3")
    monkeypatch.setenv("READYPROBE_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("READYPROBE_CONNECT_TIMEOUT", "0")

    settings = config.load_probe_settings()

    assert settings.max_attempts == config.ProbeSettings.max_attempts
    assert settings.interval == config.ProbeSettings.interval
    assert settings.http_timeout is None
    assert settings.connect_timeout is None


def test_load_probe_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("READYPROBE_MAX_ATTEMPTS", "7")
    assert config.load_probe_settings().max_attempts == 7
    monkeypatch.setenv("READYPROBE_MAX_ATTEMPTS", "8")
    assert config.load_probe_settings().max_attempts == 8


def test_categorize_exception():
    request = httpx.Request("GET", "http://svc")
    assert categorize_exception(socket.gaierror(-2, "Name or service not known")) is ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionRefusedError(111, "refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.ConnectTimeout("slow", request=request)) is ErrorCategory.TIMEOUT
    assert categorize_exception(socket.timeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("nope", request=request)) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("x")) is ErrorCategory.UNKNOWN_ERROR


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.DNS_ERROR) == "Host resolution failure"
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""


def test_transport_error_from_exception_keeps_cause():
    exc = ConnectionRefusedError(111, "Connection refused")
    error = transport_error_from_exception(exc)
    assert isinstance(error, TransportError)
    assert error.category is ErrorCategory.CONNECTION_ERROR
    assert error.error_type == "ConnectionRefusedError"
    assert error.__cause__ is exc
    assert error.reason == "Connection refused or reset"


def test_unsupported_port_type_is_resolution_error():
    error = UnsupportedPortTypeError(3)
    assert isinstance(error, ResolutionError)
    assert error.port_type == 3
    assert str(error) == "unsupported port type 3"
    assert str(UnsupportedPortTypeError("x")) == "unsupported port type x"
