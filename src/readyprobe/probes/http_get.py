# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP GET readiness prober."""

from __future__ import annotations

import logging

from ..config import ProbeSettings, load_probe_settings
from ..errors import (
    ErrorCategory,
    InvalidSpecError,
    ProbeError,
    ResolutionError,
    TransportError,
    UnsupportedSchemeError,
)
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest
from ..models.result import ProbeResult
from ..models.spec import HTTPGetAction
from .address import lookup_port, resolve_address, split_address

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = frozenset({"http"})


def normalize_scheme(scheme: str | None) -> str:
    normalized = (scheme or "").strip().lower() or "http"
    if normalized not in SUPPORTED_SCHEMES:
        raise UnsupportedSchemeError(scheme)
    return normalized


def build_probe_url(spec: HTTPGetAction) -> str:
    """Build the request URL from scheme, resolved address and path."""
    host, token = split_address(resolve_address(spec.host, spec.port))
    scheme = normalize_scheme(spec.scheme)
    port = lookup_port(token, "tcp")
    if ":" in host:
        host = f"[{host}]"
    path = spec.path or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{scheme}://{host}:{port}{path}"


class HttpGetProber:
    """Ready when a single GET to the probe URL answers exactly 200."""

    name = "httpGet"

    def __init__(self, http_client: HttpClient | None = None, settings: ProbeSettings | None = None):
        self.settings = settings or load_probe_settings()
        self.http_client = http_client or create_default_http_client(self.settings)

    def check_probe(self, spec: HTTPGetAction | None) -> ProbeResult:
        if spec is None:
            return ProbeResult.failed(InvalidSpecError("probe cannot be nil"))
        if not isinstance(spec, HTTPGetAction):
            return ProbeResult.failed(InvalidSpecError(f"expected httpGet handler, got {type(spec).__name__}"))

        try:
            url = build_probe_url(spec)
        except (ResolutionError, UnsupportedSchemeError) as exc:
            return ProbeResult.failed(exc)

        logger.info("checking probe url: %s", url)
        response = self.http_client.request(
            HttpRequest(url=url, allow_redirects=self.settings.allow_redirects)
        )
        if not response.ok or response.status_code is None:
            return ProbeResult.failed(_transport_error(response.error_message, response.error_type, response.error_category), url=url)

        ready = response.status_code == 200
        if not ready:
            logger.debug("probe url %s answered %s", url, response.status_code)
        return ProbeResult(ready=ready, metadata={"url": url, "status_code": response.status_code})


def _transport_error(message: str | None, error_type: str | None, category: str | None) -> ProbeError:
    try:
        parsed = ErrorCategory(category) if category else ErrorCategory.UNKNOWN_ERROR
    except ValueError:
        parsed = ErrorCategory.UNKNOWN_ERROR
    return TransportError(message or "HTTP request failed", category=parsed, error_type=error_type)


__all__ = ["HttpGetProber", "SUPPORTED_SCHEMES", "build_probe_url", "normalize_scheme"]
