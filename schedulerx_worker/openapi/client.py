"""Client of the management API of the scheduling service."""

import json
import threading
import time
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

from schedulerx_worker import logger
from schedulerx_worker.openapi import constants as c
from schedulerx_worker.openapi.request import BaseRequest
from schedulerx_worker.signature import hmac_sha1_encrypt

# (method, url, headers, body, timeout) -> (status code, response body)
Transport = Callable[[str, str, Mapping[str, str], Optional[bytes], float], Tuple[int, bytes]]

_client: Optional["OpenApiClient"] = None
_initialized = False
_lock = threading.Lock()


class OpenApiError(Exception):
    """A management API call could not be made or was refused."""


def _urllib_transport(
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: Optional[bytes],
    timeout: float,
) -> Tuple[int, bytes]:
    request = urllib.request.Request(url, data=body, headers=dict(headers), method=method)
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.status, response.read()
    except urllib.error.HTTPError as exc:
        try:
            return exc.code, exc.read()
        finally:
            exc.close()


@dataclass
class OpenApiClient:
    """Connection settings and HTTP access to the management console."""

    app_key: str = ""
    group_id: str = ""
    # Console host; resolved from the endpoint when left empty.
    domain: str = ""
    endpoint: str = ""
    user: str = ""
    user_id: str = ""
    user_name: str = ""
    namespace: str = ""
    namespace_source: str = ""
    init_method: str = ""
    app: str = ""
    timeout: float = 3.0
    transport: Transport = field(default=_urllib_transport, repr=False, compare=False)

    def _call(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> Tuple[int, bytes]:
        try:
            return self.transport(method, url, headers, body, self.timeout)
        except OSError as exc:
            raise OpenApiError(f"HTTP {method} failed, err={exc} ") from exc

    def http_get(self, url: str) -> Tuple[int, bytes]:
        """Send a GET request and return the status code and body."""
        return self._call("GET", url, {})

    def gen_headers(self) -> Dict[str, str]:
        """Build the headers that authenticate a request."""
        headers: Dict[str, str] = {}
        if self.namespace:
            headers[c.NAMESPACE_KEY_HEADER] = self.namespace
            if self.namespace_source:
                headers[c.NAMESPACE_SOURCE_HEADER] = self.namespace_source
        now = str(int(time.time() * 1000))
        headers[c.TIME_STAMP_HEADER] = now
        if self.group_id and self.app_key:
            headers[c.SIGNATURE_HEADER] = hmac_sha1_encrypt(self.group_id + now, self.app_key)
        headers[c.GROUPID_HEADER] = self.group_id
        headers[c.CREATE_GROUP_HEADER] = "true" if self.group_id else "false"
        return headers

    def send_request(self, url: str, request: BaseRequest) -> bytes:
        """Fill in the client's common parameters, POST them as JSON and return the body."""
        if self.group_id:
            request.set_group_id(self.group_id)
        if self.namespace:
            request.set_namespace(self.namespace)
        if self.namespace_source:
            request.set_namespace_source(self.namespace_source)
        if self.user_id:
            request.set_param("userId", self.user_id)
        if self.user_name:
            request.set_param("userName", self.user_name)
        if self.user_id and self.user_name:
            request.set_param("user", f"{self.user_name} {self.user_id}")
        else:
            request.set_param("user", self.user or "openapi")

        if not self.domain:
            raise OpenApiError("Missing required param. ")

        headers = self.gen_headers()
        params = request.params()
        logger.info("SendRequest url: %s, request params: %s, headers: %s", url, params, headers)
        headers["Content-Type"] = "application/json"
        body = json.dumps(params).encode("utf-8")
        status, payload = self._call("POST", url, headers, body)
        if status != 200:
            raise OpenApiError(f"Read http post response failed, statusCode={status} ")
        return payload

    def domain_by_endpoint(self) -> str:
        """Ask the endpoint which console domain to use."""
        if not self.endpoint:
            raise OpenApiError("Required field endpoint is empty. ")
        url = f"http://{self.endpoint}:8080/schedulerx2/consolelist"
        status, body = self.http_get(url)
        if status != 200:
            raise OpenApiError(f"Read http response failed, statusCode={status} ")
        return body.decode("utf-8", errors="replace").strip()

    def resolve_domain(self) -> None:
        """Settle the console domain, asking the endpoint if none is configured."""
        domain = self.domain
        failure: Optional[Exception] = None
        if not domain and self.endpoint:
            try:
                domain = self.domain_by_endpoint()
            except OpenApiError as exc:
                failure = exc
                logger.warning(
                    "Cannot get domainAddr from endpoint, init openAPI client failed, endpoint=%s, err=%s",
                    self.endpoint,
                    exc,
                )
        if not domain:
            raise OpenApiError(
                f"Cannot get domainAddr, init openAPI client failed, err={failure}"
            )
        self.domain = domain


def init_openapi_client(client: OpenApiClient) -> None:
    """Install the process-wide client and resolve its domain; later calls do nothing."""
    global _client, _initialized
    with _lock:
        if _initialized:
            return
        _initialized = True
        _client = client
    client.resolve_domain()


def get_openapi_client() -> Optional[OpenApiClient]:
    """Return the installed client, or None before initialisation."""
    return _client