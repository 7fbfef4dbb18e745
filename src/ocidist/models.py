"""Pydantic models for registry client configuration.

**Client input** -- :class:`ClientConfig` is the raw, untrusted description of
an endpoint and its auth fields. It is immutable but *not* validated for auth
coherence here; that is the job of :func:`ocidist.client.new_client`, which
turns it into a :class:`~ocidist.client.Client` or raises a
:class:`~ocidist.exceptions.ClientConfigError`.

**Transport settings** -- :class:`TransportConfig` holds the timeout, proxy
and TLS settings handed to :class:`~ocidist.client.RegistrySession` at its
construction site.

**Persisted settings** -- :class:`FileConfig` is the shape of the JSON config
file managed by :mod:`ocidist.config`.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_SECONDS = 5.0


class AuthMode(str, enum.Enum):
    """The authentication mode a validated client operates in."""

    NONE = "none"
    BASIC = "basic"
    TOKEN = "token"


class ClientConfig(BaseModel):
    """Connection parameters for a single OCI registry.

    Empty strings mean "not set". Secrets are excluded from ``repr`` so the
    model can be logged safely.

    Example::

        ClientConfig(endpoint="http://localhost:5000", username="u", password="p")
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(default="", description="Registry base URL")
    username: str = Field(default="", description="Basic auth username")
    password: str = Field(default="", repr=False, description="Basic auth password")
    token: str = Field(default="", repr=False, description="Bearer token")


class TransportConfig(BaseModel):
    """HTTP transport settings for talking to a registry."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds"
    )
    trust_env: bool = Field(
        default=True, description="Read proxy settings from the environment"
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")


class FileConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/ocidist/config.json``.

    ``password`` and ``token`` may hold a credential source such as
    ``env:REGISTRY_TOKEN`` or ``file:~/.registry-token``; see
    :func:`~ocidist.config.resolve_credential`.
    """

    endpoint: str = ""
    username: str = ""
    password: str = ""
    token: str = ""
    transport: TransportConfig = Field(default_factory=TransportConfig)
