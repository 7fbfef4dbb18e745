"""Exception hierarchy for ocidist.

All exceptions inherit from :class:`OcidistError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ocidist.exit_codes`.
The top-level error handler in :func:`ocidist.app.main` catches
``OcidistError`` and exits with the appropriate code.

Validation failures raised by :func:`ocidist.client.new_client` all derive
from :class:`ClientConfigError` and expose a :class:`ErrorKind` through
their ``kind`` attribute, so callers can either catch a specific subclass or
branch on ``exc.kind``.

Subclass hierarchy::

    OcidistError (exit 1)
    +-- ClientConfigError        (exit 2)
    |   +-- NoEndpointError
    |   +-- InvalidEndpointError
    |   +-- ConflictingAuthError
    |   +-- MissingUsernameError
    |   +-- MissingPasswordError
    +-- ConfigError              (exit 1)
    +-- AuthError                (exit 3)
    +-- ConnectionError_         (exit 6)
"""

from __future__ import annotations

import enum

from ocidist.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_CONFIG,
)


class ErrorKind(str, enum.Enum):
    """Inspectable tag identifying why a client configuration was rejected."""

    NO_ENDPOINT = "no_endpoint"
    INVALID_ENDPOINT = "invalid_endpoint"
    CONFLICTING_AUTH = "conflicting_auth"
    MISSING_USERNAME = "missing_username"
    MISSING_PASSWORD = "missing_password"


class OcidistError(Exception):
    """Base exception for all ocidist errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ClientConfigError(OcidistError):
    """Raised when a :class:`~ocidist.models.ClientConfig` fails validation.

    Subclasses set ``kind`` and a default message; a custom message may be
    passed to add detail (e.g. the offending endpoint).
    """

    exit_code = EXIT_INVALID_CONFIG
    kind: ErrorKind
    default_message: str = "invalid client configuration"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NoEndpointError(ClientConfigError):
    """Raised when no registry endpoint is configured."""

    kind = ErrorKind.NO_ENDPOINT
    default_message = "no endpoint provided to client"


class InvalidEndpointError(ClientConfigError):
    """Raised when the endpoint cannot be parsed as an http(s) URL."""

    kind = ErrorKind.INVALID_ENDPOINT
    default_message = "endpoint is not a valid registry URL"


class ConflictingAuthError(ClientConfigError):
    """Raised when basic-auth fields and a token are configured together."""

    kind = ErrorKind.CONFLICTING_AUTH
    default_message = (
        "client cannot be configured with both user and token authentication"
    )


class MissingUsernameError(ClientConfigError):
    """Raised when a password is configured without a username."""

    kind = ErrorKind.MISSING_USERNAME
    default_message = "no username defined"


class MissingPasswordError(ClientConfigError):
    """Raised when a username is configured without a password."""

    kind = ErrorKind.MISSING_PASSWORD
    default_message = "no password defined"


class ConfigError(OcidistError):
    """Raised for config file problems (invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class AuthError(OcidistError):
    """Raised when the registry answers 401/403 to an authenticated request."""

    exit_code = EXIT_AUTH_FAILURE


class ConnectionError_(OcidistError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR
