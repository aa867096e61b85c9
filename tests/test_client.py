import json

import pytest

from schedulerx_worker.openapi import client as client_mod
from schedulerx_worker.openapi import constants as c
from schedulerx_worker.openapi.client import OpenApiClient, OpenApiError
from schedulerx_worker.openapi.request import BaseRequest
from schedulerx_worker.signature import hmac_sha1_encrypt


class FakeTransport:
    def __init__(self, status=200, body=b"ok", error=None):
        self.status = status
        self.body = body
        self.error = error
        self.calls = []

    def __call__(self, method, url, headers, body, timeout):
        self.calls.append((method, url, dict(headers), body, timeout))
        if self.error is not None:
            raise self.error
        return self.status, self.body


def make_client(**kwargs):
    transport = kwargs.pop("transport", FakeTransport())
    return OpenApiClient(transport=transport, **kwargs), transport


def test_gen_headers_full():
    cli, _ = make_client(group_id="grp", app_key="placeholder", namespace="ns", namespace_source="src")
    headers = cli.gen_headers()
    ts = headers[c.TIME_STAMP_HEADER]
    assert ts.isdigit()
    assert headers[c.SIGNATURE_HEADER] == hmac_sha1_encrypt("grp" + ts, "placeholder")
    assert headers[c.NAMESPACE_KEY_HEADER] == "ns"
    assert headers[c.NAMESPACE_SOURCE_HEADER] == "src"
    assert headers[c.GROUPID_HEADER] == "grp"
    assert headers[c.CREATE_GROUP_HEADER] == "true"


def test_gen_headers_without_group():
    cli, _ = make_client(app_key="placeholder")
    headers = cli.gen_headers()
    assert c.SIGNATURE_HEADER not in headers
    assert headers[c.GROUPID_HEADER] == ""
    assert headers[c.CREATE_GROUP_HEADER] == "false"


def test_namespace_source_needs_namespace():
    cli, _ = make_client(namespace_source="src")
    headers = cli.gen_headers()
    assert c.NAMESPACE_SOURCE_HEADER not in headers
    assert c.NAMESPACE_KEY_HEADER not in headers


def test_send_request_posts_params():
    cli, transport = make_client(domain="console.example.com", group_id="grp", namespace="ns")
    url = "http://console.example.com/openapi/v1/job/create"
    result = cli.send_request(url, BaseRequest())
    assert result == b"ok"
    method, sent_url, headers, body, _ = transport.calls[0]
    assert method == "POST"
    assert sent_url == url
    assert headers["Content-Type"] == "application/json"
    assert json.loads(body) == {"groupId": "grp", "namespace": "ns", "user": "openapi"}


def test_send_request_user_fields():
    cli, transport = make_client(domain="d", user_id="7", user_name="alice", namespace_source="src")
    cli.send_request("http://d/x", BaseRequest())
    params = json.loads(transport.calls[0][3])
    assert params["user"] == "alice 7"
    assert params["userId"] == "7"
    assert params["userName"] == "alice"
    assert params["namespaceSource"] == "src"


def test_send_request_custom_user():
    cli, transport = make_client(domain="d", user="bob")
    cli.send_request("http://d/x", BaseRequest())
    assert json.loads(transport.calls[0][3])["user"] == "bob"


def test_send_request_requires_domain():
    cli, transport = make_client()
    with pytest.raises(OpenApiError, match="Missing required param"):
        cli.send_request("http://x/y", BaseRequest())
    assert transport.calls == []


def test_send_request_bad_status():
    cli, _ = make_client(domain="d", transport=FakeTransport(status=500))
    with pytest.raises(OpenApiError, match="statusCode=500"):
        cli.send_request("http://d/x", BaseRequest())


def test_transport_failure_wrapped():
    cli, _ = make_client(domain="d", transport=FakeTransport(error=ConnectionRefusedError("down")))
    with pytest.raises(OpenApiError):
        cli.send_request("http://d/x", BaseRequest())


def test_http_get_returns_status_and_body():
    cli, transport = make_client(transport=FakeTransport(status=404, body=b"nope"))
    assert cli.http_get("http://d/x") == (404, b"nope")
    assert transport.calls[0][0] == "GET"


def test_domain_by_endpoint():
    cli, transport = make_client(endpoint="ep.example.com", transport=FakeTransport(body=b"  console.example.com\n"))
    assert cli.domain_by_endpoint() == "console.example.com"
    assert transport.calls[0][1] == "http://ep.example.com:8080/schedulerx2/consolelist"


def test_domain_by_endpoint_requires_endpoint():
    cli, _ = make_client()
    with pytest.raises(OpenApiError):
        cli.domain_by_endpoint()


def test_domain_by_endpoint_bad_status():
    cli, _ = make_client(endpoint="ep", transport=FakeTransport(status=503))
    with pytest.raises(OpenApiError, match="503"):
        cli.domain_by_endpoint()


def test_resolve_domain_keeps_configured():
    cli, transport = make_client(domain="given", endpoint="ep")
    cli.resolve_domain()
    assert cli.domain == "given"
    assert transport.calls == []


def test_resolve_domain_from_endpoint():
    cli, _ = make_client(endpoint="ep", transport=FakeTransport(body=b"found"))
    cli.resolve_domain()
    assert cli.domain == "found"


def test_resolve_domain_fails():
    cli, _ = make_client()
    with pytest.raises(OpenApiError, match="Cannot get domainAddr"):
        cli.resolve_domain()
    cli2, _ = make_client(endpoint="ep", transport=FakeTransport(status=500))
    with pytest.raises(OpenApiError, match="Cannot get domainAddr"):
        cli2.resolve_domain()


def test_init_and_get_once():
    first, _ = make_client(domain="first")
    second, _ = make_client(domain="second")
    client_mod.init_openapi_client(first)
    client_mod.init_openapi_client(second)
    assert client_mod.get_openapi_client() is first