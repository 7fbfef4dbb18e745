"""Credential variants for registry authentication.

The main entry points are:

- :data:`Credential` -- the closed union of :class:`NoCredential`,
  :class:`BasicCredential` and :class:`TokenCredential`.
- :func:`inject` -- set the ``Authorization`` header of an
  :class:`httpx.Request` according to a credential.

Typical usage::

    from ocidist.auth import TokenCredential, inject

    inject(TokenCredential(token="abc"), request)
"""

from ocidist.auth.credentials import (
    AUTHORIZATION,
    BasicCredential,
    Credential,
    NoCredential,
    TokenCredential,
    auth_mode,
    authorization_header,
    inject,
)

__all__ = [
    "AUTHORIZATION",
    "BasicCredential",
    "Credential",
    "NoCredential",
    "TokenCredential",
    "auth_mode",
    "authorization_header",
    "inject",
]
