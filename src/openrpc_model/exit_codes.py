"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~openrpc_model.exceptions.OpenRpcModelError` subclass.
Shell wrappers and CI jobs can tell a broken document apart from a missing
file without parsing stderr.

Example::

    $ openrpc-model check service.json
    $ echo $?
    7   # EXIT_INVALID_DOCUMENT -- the document failed to decode
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""The document source (file path) does not exist."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred while fetching a remote document."""

EXIT_INVALID_DOCUMENT = 7
"""The OpenRPC document could not be decoded."""
