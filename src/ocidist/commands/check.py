"""Registry client commands -- ``ocidist check``, ``header`` and ``ping``.

All three resolve a :class:`~ocidist.models.ClientConfig` from flags,
``OCIDIST_*`` environment variables and the config file, then run it
through :func:`~ocidist.client.new_client`. A rejected configuration exits
with the error's exit code (2 for validation failures). Only ``ping``
touches the network.
"""

from __future__ import annotations

from typing import Optional

import httpx
import typer

from ocidist.auth import AUTHORIZATION
from ocidist.client import Client, RegistrySession, new_client
from ocidist.config import resolve_client_config, resolve_transport_config
from ocidist.exceptions import ErrorKind, OcidistError
from ocidist.output import (
    debug,
    error,
    format_response,
    print_authorization,
    print_client_summary,
    success,
    suggest,
)

API_VERSION_HEADER = "Docker-Distribution-API-Version"

_SUGGESTIONS = {
    ErrorKind.NO_ENDPOINT: "Pass --endpoint or run 'ocidist config set endpoint <url>'.",
    ErrorKind.INVALID_ENDPOINT: "Use an absolute URL such as https://registry.example.com.",
    ErrorKind.CONFLICTING_AUTH: "Configure either --username/--password or --token, not both.",
    ErrorKind.MISSING_USERNAME: "Add --username to go with the password.",
    ErrorKind.MISSING_PASSWORD: "Add --password to go with the username.",
}


def _fail(exc: OcidistError) -> typer.Exit:
    error(str(exc))
    kind = getattr(exc, "kind", None)
    if kind in _SUGGESTIONS:
        suggest(_SUGGESTIONS[kind])
    return typer.Exit(code=exc.exit_code)


def _build_client(
    endpoint: Optional[str],
    username: Optional[str],
    password: Optional[str],
    token: Optional[str],
    no_config: bool,
) -> Client:
    """Resolve configuration and validate it, exiting on failure."""
    try:
        config = resolve_client_config(
            endpoint=endpoint,
            username=username,
            password=password,
            token=token,
            use_file=not no_config,
        )
        debug(f"Resolved config: {config!r}")
        return new_client(config)
    except OcidistError as exc:
        raise _fail(exc) from None


def check_command(
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="Registry URL."),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Basic auth username."),
    password: Optional[str] = typer.Option(None, "--password", help="Basic auth password."),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Bearer token."),
    no_config: bool = typer.Option(False, "--no-config", help="Ignore the config file."),
) -> None:
    """Validate the registry configuration and show the selected auth mode.

    Example::

        ocidist check --endpoint http://localhost:5000 --username u --password p
        OCIDIST_TOKEN=abc ocidist check --json
    """
    client = _build_client(endpoint, username, password, token, no_config)
    success("Configuration is valid.")
    print_client_summary(client)


def header_command(
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="Registry URL."),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Basic auth username."),
    password: Optional[str] = typer.Option(None, "--password", help="Basic auth password."),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Bearer token."),
    no_config: bool = typer.Option(False, "--no-config", help="Ignore the config file."),
    show_secret: bool = typer.Option(
        False, "--show-secret", help="Print the credential instead of masking it."
    ),
) -> None:
    """Print the Authorization header requests to the registry would carry.

    Example::

        ocidist header --token abc --show-secret
    """
    client = _build_client(endpoint, username, password, token, no_config)
    request = client.authenticate(httpx.Request("GET", client.url_for("/v2/")))
    print_authorization(request.headers.get(AUTHORIZATION), show_secret)


def ping_command(
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="Registry URL."),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Basic auth username."),
    password: Optional[str] = typer.Option(None, "--password", help="Basic auth password."),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Bearer token."),
    no_config: bool = typer.Option(False, "--no-config", help="Ignore the config file."),
) -> None:
    """Send an authenticated ``GET /v2/`` to check the registry accepts the credentials.

    Timeout, proxy and TLS settings come from the ``transport`` section of
    the config file.

    Example::

        ocidist ping --endpoint https://registry.example.com --token abc
    """
    client = _build_client(endpoint, username, password, token, no_config)
    try:
        transport = resolve_transport_config(use_file=not no_config)
        debug(f"Transport: {transport!r}")
        with RegistrySession(client, transport) as session:
            response = session.get("/v2/")
    except OcidistError as exc:
        raise _fail(exc) from None

    if response.status_code >= 400:
        error(f"HTTP {response.status_code} from {response.request.url}")
        raise typer.Exit(code=1)
    success(f"Registry at {client.endpoint} accepted {client.auth_mode.value} auth.")
    format_response(
        {
            "endpoint": str(client.endpoint),
            "status": response.status_code,
            "api_version": response.headers.get(API_VERSION_HEADER, ""),
        },
        title="Registry ping",
    )
