"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~ocidist.exceptions.OcidistError` subclass.
Shell wrappers can inspect the exit code to tell a bad configuration from a
rejected credential without parsing stderr.

Example::

    $ ocidist check --username alice
    $ echo $?
    2   # EXIT_INVALID_CONFIG -- password is missing
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_CONFIG = 2
"""The client configuration failed validation (endpoint or auth fields)."""

EXIT_AUTH_FAILURE = 3
"""The registry rejected the supplied credentials."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
