"""ocidist -- credential validation and injection for OCI registry clients.

This package turns a flat set of registry connection parameters (endpoint,
username/password, token) into an immutable :class:`~ocidist.client.Client`
that stamps the right ``Authorization`` header onto outgoing requests for
any registry implementing the OCI Distribution Specification.

Typical usage::

    from ocidist import ClientConfig, new_client

    client = new_client(ClientConfig(endpoint="https://registry.example.com",
                                     token="s3cr3t"))
    request = client.authenticate(httpx.Request("GET", client.url_for("/v2/")))

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for client and transport configuration.
    config: XDG-aware config file handling and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

from ocidist.auth import BasicCredential, Credential, NoCredential, TokenCredential, inject
from ocidist.client import Client, ClientFactory, RegistrySession, new_client
from ocidist.exceptions import ClientConfigError, ErrorKind
from ocidist.models import ClientConfig, TransportConfig

__version__ = "0.1.0"

__all__ = [
    "BasicCredential",
    "Client",
    "ClientConfig",
    "ClientConfigError",
    "ClientFactory",
    "Credential",
    "ErrorKind",
    "NoCredential",
    "RegistrySession",
    "TokenCredential",
    "TransportConfig",
    "inject",
    "new_client",
]
