"""Synchronous HTTP session bound to an authenticated registry client.

:class:`RegistrySession` is the transport seam for registry operations. It
wraps :class:`httpx.Client`, built from an explicit
:class:`~ocidist.models.TransportConfig`, and passes every outgoing request
through :meth:`~ocidist.client.client.Client.authenticate` before it is
sent. It does not retry.

Example::

    client = new_client(ClientConfig(endpoint="https://registry.example.com",
                                     token="abc"))
    with RegistrySession(client) as session:
        response = session.get("/v2/")
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ocidist.client.client import Client
from ocidist.exceptions import AuthError, ConnectionError_
from ocidist.models import TransportConfig

logger = logging.getLogger(__name__)


class RegistrySession:
    """HTTP session that authenticates every request with a :class:`Client`.

    Must be used as a context manager so that the underlying connection pool
    is opened and closed.

    Args:
        client: The validated registry client.
        transport: Timeout, proxy and TLS settings. Defaults to
            :class:`~ocidist.models.TransportConfig` defaults.
        http_transport: Optional custom httpx transport, e.g.
            :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        client: Client,
        transport: Optional[TransportConfig] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = client
        self._transport = transport or TransportConfig()
        self._http_transport = http_transport
        self._http: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> RegistrySession:
        self._http = httpx.Client(
            timeout=self._transport.timeout,
            verify=self._transport.verify_ssl,
            trust_env=self._transport.trust_env,
            transport=self._http_transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._http:
            self._http.close()
            self._http = None

    @property
    def client(self) -> Client:
        return self._client

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def build_request(self, method: str, path: str, **kwargs: Any) -> httpx.Request:
        """Build an authenticated request against the registry endpoint.

        Args:
            method: HTTP method.
            path: Registry API path, joined onto the client's endpoint.
            **kwargs: Forwarded to :meth:`httpx.Client.build_request`
                (``headers``, ``params``, ``content``, ...).

        Returns:
            An :class:`httpx.Request` carrying the client's credentials.
        """
        http = self._require_http()
        request = http.build_request(method, self._client.url_for(path), **kwargs)
        return self._client.authenticate(request)

    def send(self, request: httpx.Request) -> httpx.Response:
        """Authenticate and send *request*, returning the raw response.

        Requests built elsewhere are authenticated here too; authenticating
        an already-authenticated request yields the same header.

        Raises:
            ConnectionError_: On network or timeout errors.
        """
        http = self._require_http()
        self._client.authenticate(request)
        logger.debug("%s %s", request.method, request.url)
        try:
            return http.send(request)
        except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
            raise ConnectionError_(f"Request to {request.url} failed: {exc}") from exc

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Build, authenticate and send a request.

        Raises:
            AuthError: If the registry answers 401 or 403.
            ConnectionError_: On network or timeout errors.
        """
        response = self.send(self.build_request(method, path, **kwargs))
        if response.status_code in (401, 403):
            raise AuthError(
                f"HTTP {response.status_code}: registry rejected "
                f"{self._client.auth_mode.value} credentials"
            )
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def head(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("HEAD", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    def _require_http(self) -> httpx.Client:
        assert self._http is not None, "Session not open -- use as context manager"
        return self._http
