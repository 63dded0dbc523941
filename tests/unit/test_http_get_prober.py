# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from readyprobe.config import ProbeSettings
from readyprobe.errors import (
    ErrorCategory,
    InvalidSpecError,
    ResolutionError,
    TransportError,
    UnsupportedPortTypeError,
    UnsupportedSchemeError,
)
from readyprobe.http.adapters import StubHttpClient
from readyprobe.http.httpx_client import HttpxClient
from readyprobe.http.models import HttpResponse
from readyprobe.models import HTTPGetAction, PortSpec, TCPSocketAction
from readyprobe.probes.http_get import HttpGetProber, build_probe_url, normalize_scheme


@pytest.fixture
def live_prober():
    client = HttpxClient(ProbeSettings(http_timeout=5.0))
    try:
        yield HttpGetProber(http_client=client, settings=ProbeSettings())
    finally:
        client.close()


def _action(address, *, port=None, path="/health", scheme="HTTP"):
    host, number = address
    return HTTPGetAction(host=host, port=port or PortSpec.from_int(number), path=path, scheme=scheme)


def test_nil_probe_is_invalid():
    result = HttpGetProber(http_client=StubHttpClient()).check_probe(None)
    assert result.ready is False
    assert isinstance(result.error, InvalidSpecError)
    assert str(result.error) == "probe cannot be nil"


def test_wrong_handler_kind_is_invalid():
    result = HttpGetProber(http_client=StubHttpClient()).check_probe(TCPSocketAction(port=PortSpec.from_int(80)))
    assert isinstance(result.error, InvalidSpecError)


def test_live_endpoint_ready_with_numeric_port(http_server, live_prober):
    result = live_prober.check_probe(_action(http_server))
    assert result.ready is True
    assert result.error is None
    assert result.metadata["status_code"] == 200


def test_live_endpoint_ready_with_string_port(http_server, live_prober):
    result = live_prober.check_probe(_action(http_server, port=PortSpec.from_str(str(http_server[1]))))
    assert result.ready is True
    assert result.error is None


def test_live_endpoint_bad_path_is_not_ready(http_server, live_prober):
    result = live_prober.check_probe(_action(http_server, path="bad_host_path"))
    assert result.ready is False
    assert result.error is None
    assert result.metadata["status_code"] == 404


def test_other_2xx_is_not_ready(http_server, live_prober):
    result = live_prober.check_probe(_action(http_server, path="/created"))
    assert result.ready is False
    assert result.error is None


def test_unresolvable_host_reports_resolution_failure(live_prober):
    result = live_prober.check_probe(_action(("bad-host-name.invalid", 80)))
    assert result.ready is False
    assert isinstance(result.error, TransportError)
    assert result.error.category is ErrorCategory.DNS_ERROR


def test_connection_refused_is_transport_error(closed_port, live_prober):
    result = live_prober.check_probe(_action(("127.0.0.1", closed_port)))
    assert result.ready is False
    assert isinstance(result.error, TransportError)
    assert result.error.category is ErrorCategory.CONNECTION_ERROR


def test_unsupported_port_type():
    client = StubHttpClient()
    result = HttpGetProber(http_client=client).check_probe(HTTPGetAction(host="svc", port=PortSpec(type=3)))
    assert result.ready is False
    assert isinstance(result.error, UnsupportedPortTypeError)
    assert str(result.error) == "unsupported port type 3"
    assert client.requests == []


def test_non_integer_port_type_tag():
    client = StubHttpClient()
    result = HttpGetProber(http_client=client).check_probe(HTTPGetAction(host="svc", port=PortSpec(type="x")))
    assert result.ready is False
    assert isinstance(result.error, UnsupportedPortTypeError)
    assert str(result.error) == "unsupported port type x"
    assert client.requests == []


def test_unknown_named_port_is_resolution_error(monkeypatch):
    import socket

    def _missing(name, proto):  # noqa: ARG001
        raise OSError("not found")

    monkeypatch.setattr(socket, "getservbyname", _missing)
    result = HttpGetProber(http_client=StubHttpClient()).check_probe(
        HTTPGetAction(host="svc", port=PortSpec.from_str("no-such-service"))
    )
    assert isinstance(result.error, ResolutionError)


@pytest.mark.parametrize("scheme", ["HTTPS", "https", "ftp"])
def test_unsupported_scheme_is_rejected(scheme):
    client = StubHttpClient()
    result = HttpGetProber(http_client=client).check_probe(HTTPGetAction(host="svc", port=PortSpec.from_int(80), scheme=scheme))
    assert isinstance(result.error, UnsupportedSchemeError)
    assert client.requests == []


def test_strict_200_with_stub_client():
    client = StubHttpClient()
    client.add("http://svc:8080/ready", HttpResponse(ok=True, status_code=200))
    client.add("http://svc:8080/nocontent", HttpResponse(ok=True, status_code=204))
    prober = HttpGetProber(http_client=client)

    assert prober.check_probe(HTTPGetAction(host="svc", port=PortSpec.from_int(8080), path="/ready")).ready is True
    result = prober.check_probe(HTTPGetAction(host="svc", port=PortSpec.from_int(8080), path="/nocontent"))
    assert result.ready is False
    assert result.error is None
    assert [r.method for r in client.requests] == ["GET", "GET"]


def test_stub_transport_failure_maps_category():
    client = StubHttpClient()
    client.add(
        "http://svc:80/",
        HttpResponse(ok=False, error_message="timed out", error_type="ConnectTimeout", error_category="TIMEOUT"),
    )
    result = HttpGetProber(http_client=client).check_probe(HTTPGetAction(host="svc", port=PortSpec.from_int(80)))
    assert isinstance(result.error, TransportError)
    assert result.error.category is ErrorCategory.TIMEOUT
    assert result.error.error_type == "ConnectTimeout"


def test_build_probe_url():
    assert build_probe_url(HTTPGetAction(host="svc", port=PortSpec.from_int(80), path="health")) == "http://svc:80/health"
    assert build_probe_url(HTTPGetAction(host="::1", port=PortSpec.from_int(80), path="/h", scheme="")) == "http://[::1]:80/h"
    assert build_probe_url(HTTPGetAction(host="svc", port=PortSpec.from_str("8081"), path="")) == "http://svc:8081/"


def test_normalize_scheme():
    assert normalize_scheme("HTTP") == "http"
    assert normalize_scheme(None) == "http"
    with pytest.raises(UnsupportedSchemeError):
        normalize_scheme("https")
