"""Validation of :class:`~ocidist.models.ClientConfig` into a :class:`Client`.

The factory enforces that a configuration describes exactly one coherent
auth mode. Checks run in a fixed order so that the reported error is
deterministic:

1. the endpoint is present,
2. the endpoint parses as an absolute ``http``/``https`` URL,
3. basic-auth fields and a token are not both set,
4. a basic-auth pair is complete.

Basic auth is *detected* when either the username or the password is set
and *required* to have both, so a half-configured pair surfaces as
:class:`~ocidist.exceptions.MissingUsernameError` or
:class:`~ocidist.exceptions.MissingPasswordError` rather than silently
falling back to anonymous access.
"""

from __future__ import annotations

import logging

import httpx

from ocidist.auth import BasicCredential, Credential, NoCredential, TokenCredential
from ocidist.client.client import Client
from ocidist.exceptions import (
    ConflictingAuthError,
    InvalidEndpointError,
    MissingPasswordError,
    MissingUsernameError,
    NoEndpointError,
)
from ocidist.models import ClientConfig

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = ("http", "https")


def parse_endpoint(endpoint: str) -> httpx.URL:
    """Parse and check a registry endpoint.

    Args:
        endpoint: The configured endpoint string.

    Returns:
        The parsed URL.

    Raises:
        NoEndpointError: If *endpoint* is empty.
        InvalidEndpointError: If it is not an absolute http(s) URL with a host.
    """
    if endpoint == "":
        raise NoEndpointError()
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as exc:
        raise InvalidEndpointError(f"invalid endpoint {endpoint!r}: {exc}") from exc
    if url.scheme not in _ALLOWED_SCHEMES:
        raise InvalidEndpointError(
            f"invalid endpoint {endpoint!r}: scheme must be http or https"
        )
    if not url.host:
        raise InvalidEndpointError(f"invalid endpoint {endpoint!r}: missing host")
    return url


def select_credential(config: ClientConfig) -> Credential:
    """Choose the credential variant described by *config*.

    Raises:
        ConflictingAuthError: If basic-auth fields and a token are both set.
        MissingUsernameError: If only a password is set.
        MissingPasswordError: If only a username is set.
    """
    basic_auth = config.username != "" or config.password != ""
    token_auth = config.token != ""

    if basic_auth and token_auth:
        raise ConflictingAuthError()
    if basic_auth:
        if config.username == "":
            raise MissingUsernameError()
        if config.password == "":
            raise MissingPasswordError()
        return BasicCredential(username=config.username, password=config.password)
    if token_auth:
        return TokenCredential(token=config.token)
    return NoCredential()


def new_client(config: ClientConfig) -> Client:
    """Validate *config* and build an immutable :class:`Client`.

    No network calls are made.

    Args:
        config: Raw connection parameters.

    Returns:
        A client carrying the parsed endpoint and the selected credential.

    Raises:
        ClientConfigError: A subclass identifying the first failed check;
            ``exc.kind`` carries the matching
            :class:`~ocidist.exceptions.ErrorKind`.
    """
    endpoint = parse_endpoint(config.endpoint)
    credential = select_credential(config)
    logger.debug("Configured client for %s with %s auth", endpoint, credential.kind)
    return Client(endpoint, credential)


class ClientFactory:
    """Object form of :func:`new_client` for callers that inject factories.

    Example::

        factory = ClientFactory()
        client = factory.new(ClientConfig(endpoint="http://localhost:5000"))
    """

    def new(self, config: ClientConfig) -> Client:
        """Validate *config* and return a :class:`Client`. See :func:`new_client`."""
        return new_client(config)
