"""Credential variants and header injection.

A :data:`Credential` is one of exactly three immutable variants:

- :class:`NoCredential` -- anonymous access, requests are left untouched.
- :class:`BasicCredential` -- HTTP Basic, ``Authorization: Basic <b64>``
  per :rfc:`7617`.
- :class:`TokenCredential` -- ``Authorization: Bearer <token>`` per
  :rfc:`6750`.

The set is closed: :func:`inject` dispatches on the variant type and there
is no registration hook for new strategies. Variants refuse empty fields at
construction, so injection itself never has to re-check them.

See Also:
    :func:`ocidist.client.new_client` -- the only place that picks a variant
    from user input.
"""

from __future__ import annotations

import base64
from typing import Annotated, Literal, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ocidist.models import AuthMode

AUTHORIZATION = "Authorization"


class NoCredential(BaseModel):
    """Anonymous access; :func:`inject` leaves the request unchanged."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class BasicCredential(BaseModel):
    """Username and password sent with the HTTP Basic scheme."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["basic"] = "basic"
    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class TokenCredential(BaseModel):
    """Opaque bearer token, typically an OAuth2 access token."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["token"] = "token"
    token: str = Field(min_length=1, repr=False)


Credential = Annotated[
    Union[NoCredential, BasicCredential, TokenCredential],
    Field(discriminator="kind"),
]


def auth_mode(credential: Credential) -> AuthMode:
    """Return the :class:`~ocidist.models.AuthMode` a credential represents."""
    return AuthMode(credential.kind)


def authorization_header(credential: Credential) -> Optional[str]:
    """Build the ``Authorization`` header value for *credential*.

    Returns:
        The header value, or ``None`` for :class:`NoCredential`.

    Raises:
        TypeError: If *credential* is not one of the three variants.
    """
    if isinstance(credential, NoCredential):
        return None
    if isinstance(credential, BasicCredential):
        raw = f"{credential.username}:{credential.password}"
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"
    if isinstance(credential, TokenCredential):
        return f"Bearer {credential.token}"
    raise TypeError(f"Unsupported credential type: {type(credential).__name__}")


def inject(credential: Credential, request: httpx.Request) -> httpx.Request:
    """Stamp *request* with the ``Authorization`` header for *credential*.

    The request is modified in place and returned for chaining. For
    :class:`NoCredential` the request is returned as-is; an existing
    ``Authorization`` header set by the caller is not removed.

    Args:
        credential: A validated credential variant.
        request: The outgoing request, owned by the caller.

    Returns:
        The same *request* object.
    """
    value = authorization_header(credential)
    if value is not None:
        request.headers[AUTHORIZATION] = value
    return request
