"""The validated, immutable registry client.

A :class:`Client` couples a parsed registry endpoint with exactly one
:data:`~ocidist.auth.Credential`. It is only ever built by
:func:`~ocidist.client.factory.new_client`; once built it never changes, so
one instance can be shared by any number of threads calling
:meth:`Client.authenticate` concurrently.
"""

from __future__ import annotations

import httpx

from ocidist.auth import Credential, NoCredential, auth_mode, inject
from ocidist.models import AuthMode


class Client:
    """Registry endpoint plus the credential used to authenticate against it.

    The client holds no connections and performs no I/O. Pair it with a
    :class:`~ocidist.client.session.RegistrySession` (or any transport that
    calls :meth:`authenticate` before dispatch) to talk to the registry.

    Args:
        endpoint: The parsed registry base URL.
        credential: The credential variant chosen during validation.
    """

    __slots__ = ("_endpoint", "_credential")

    def __init__(self, endpoint: httpx.URL, credential: Credential) -> None:
        self._endpoint = endpoint
        self._credential = credential

    def __repr__(self) -> str:
        return f"Client(endpoint={str(self._endpoint)!r}, auth_mode={self.auth_mode.value!r})"

    @property
    def endpoint(self) -> httpx.URL:
        """The registry base URL."""
        return self._endpoint

    @property
    def credential(self) -> Credential:
        """The credential variant stamped onto every request."""
        return self._credential

    @property
    def auth_mode(self) -> AuthMode:
        return auth_mode(self._credential)

    @property
    def auth_enabled(self) -> bool:
        """``True`` unless the client talks to the registry anonymously."""
        return not isinstance(self._credential, NoCredential)

    def url_for(self, path: str) -> httpx.URL:
        """Append a registry API path to the endpoint.

        Any path prefix on the endpoint is preserved, so a registry mounted
        at ``https://host/registry`` resolves ``/v2/`` to
        ``https://host/registry/v2/``.

        Args:
            path: API path such as ``/v2/library/alpine/manifests/latest``.

        Returns:
            The absolute URL.
        """
        base = self._endpoint.path.rstrip("/")
        return self._endpoint.copy_with(path=f"{base}/{path.lstrip('/')}")

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        """Set the ``Authorization`` header of *request* for this client.

        Every request bound for the registry must pass through here before
        it is sent. The request is modified in place and returned.

        Args:
            request: A caller-owned outgoing request.

        Returns:
            The same request, with credentials applied.
        """
        return inject(self._credential, request)
