"""Registry client construction and the authenticated HTTP session.

Classes and functions:
    :func:`new_client` / :class:`ClientFactory` -- validate a
    :class:`~ocidist.models.ClientConfig` into a :class:`Client`.
    :class:`Client` -- immutable endpoint + credential pair.
    :class:`RegistrySession` -- :class:`httpx.Client` wrapper that
    authenticates every request through a :class:`Client`.
"""

from ocidist.client.client import Client
from ocidist.client.factory import ClientFactory, new_client, parse_endpoint, select_credential
from ocidist.client.session import RegistrySession

__all__ = [
    "Client",
    "ClientFactory",
    "RegistrySession",
    "new_client",
    "parse_endpoint",
    "select_credential",
]
