"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~apidocgen.exceptions.ApidocgenError` subclass.
Shell wrappers and CI jobs can inspect the exit code to tell an unreachable
backend from a malformed document without parsing stderr.

Example::

    $ apidocgen -s http://localhost:5033/swagger/v1/swagger.json --bp /api/
    $ echo $?
    6   # EXIT_CONNECTION_ERROR -- the backend is not running
"""

EXIT_SUCCESS = 0
"""Every endpoint was generated."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred, or at least one endpoint failed to write."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid or missing arguments."""

EXIT_CONNECTION_ERROR = 6
"""The document source could not be reached (refused, DNS failure, timeout, HTTP error)."""

EXIT_SPEC_PARSE_ERROR = 7
"""The fetched document is not valid JSON or has no ``paths`` object."""
