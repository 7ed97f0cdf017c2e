"""Exception hierarchy for apidocgen.

All exceptions inherit from :class:`ApidocgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`apidocgen.exit_codes`.
The top-level error handler in :func:`apidocgen.app.main` catches
``ApidocgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ApidocgenError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConnectionError_    (exit 6)
    +-- SpecParseError      (exit 7)
    +-- WriteError          (exit 1)
    +-- ConfigError         (exit 1)

:class:`ConnectionError_` and :class:`SpecParseError` abort a run.
:class:`WriteError` is scoped to a single endpoint and is captured in the
:class:`~apidocgen.models.GenerationReport` instead of propagating.
"""

from apidocgen.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class ApidocgenError(Exception):
    """Base exception for all apidocgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`apidocgen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApidocgenError):
    """Raised for invalid CLI arguments or missing required values."""

    exit_code = EXIT_INVALID_USAGE


class ConnectionError_(ApidocgenError):
    """Raised when the document source is unreachable (refused, DNS, timeout, HTTP error).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class SpecParseError(ApidocgenError):
    """Raised when the fetched document is not valid JSON or has no ``paths`` map."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class WriteError(ApidocgenError):
    """Raised when appending to or formatting a generated file fails.

    Args:
        message: Human-readable error description.
        path: The file that could not be written or formatted.
    """

    exit_code = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ConfigError(ApidocgenError):
    """Raised for configuration problems (invalid project config, unreadable scratch file)."""

    exit_code = EXIT_GENERIC_FAILURE
