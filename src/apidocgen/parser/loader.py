"""Load Swagger/OpenAPI documents from a URL, local file, or stdin.

This module handles all I/O for fetching the raw document and converting it
into a Python dictionary. A backend normally serves ``swagger.json``, so the
body is parsed as JSON; YAML is accepted only when the response content type
or the file extension declares it.

The two public functions are:

* :func:`load_document` -- Load and parse a document from any supported source.
* :func:`validate_document` -- Check that the document has a ``paths`` map and
  return its Swagger/OpenAPI version label.

Network failures raise :class:`~apidocgen.exceptions.ConnectionError_`;
undecodable bodies raise :class:`~apidocgen.exceptions.SpecParseError`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from apidocgen.exceptions import ConnectionError_, InvalidUsageError, SpecParseError


def load_document(source: str, timeout: float = 30.0) -> dict[str, Any]:
    """Load a document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: Network timeout in seconds for URL sources.

    Returns:
        The parsed document as a dictionary.

    Raises:
        ConnectionError_: If a URL source is unreachable or answers with an
            HTTP error status.
        SpecParseError: If the content cannot be parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, timeout)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin."""
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="json")


def _load_from_url(url: str, timeout: float = 30.0) -> dict[str, Any]:
    """Fetch a document with a single GET request.

    Raises:
        ConnectionError_: On refused connections, DNS failures, timeouts and
            HTTP error statuses.
        InvalidUsageError: If *url* is not a valid URL.
        SpecParseError: If the body cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ConnectionError_(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.ConnectError as exc:
        raise ConnectionError_(
            f"Could not connect to {url}: the server is off or the URL is incorrect."
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(f"Failed to fetch document from {url}: {exc}") from exc
    except httpx.InvalidURL as exc:
        raise InvalidUsageError(f"Invalid document URL {url!r}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = "yaml" if ("yaml" in content_type or "yml" in content_type) else "json"
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local ``.json``, ``.yaml`` or ``.yml`` file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Document file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read document file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Document file is empty: {path}")

    hint = "yaml" if file_path.suffix.lower() in (".yaml", ".yml") else "json"
    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "json") -> dict[str, Any]:
    """Parse *content* as JSON, or as YAML when *hint* is ``"yaml"``.

    Raises:
        SpecParseError: If the content is malformed or is not an object.
    """
    if hint == "yaml":
        try:
            result = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise SpecParseError(f"Invalid YAML: {exc}") from exc
    else:
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            raise SpecParseError(f"Invalid JSON: {exc}") from exc

    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Document must be a JSON object (got {kind})")
    return result


def validate_document(document: dict[str, Any]) -> str:
    """Validate the document shape and return its version label.

    Both Swagger 2.0 and OpenAPI 3.x documents are accepted since only the
    ``paths`` map is used.

    Returns:
        A label such as ``"Swagger 2.0"``, ``"OpenAPI 3.0.1"`` or ``"unknown"``.

    Raises:
        SpecParseError: If ``paths`` is missing or is not an object.
    """
    paths = document.get("paths")
    if paths is None:
        raise SpecParseError(
            "Missing 'paths' object. Is this a Swagger/OpenAPI document?"
        )
    if not isinstance(paths, dict):
        raise SpecParseError(
            f"'paths' must be an object (got {type(paths).__name__})"
        )

    if "swagger" in document:
        return f"Swagger {document['swagger']}"
    if "openapi" in document:
        return f"OpenAPI {document['openapi']}"
    return "unknown"
