"""Extract endpoint records from the ``paths`` map of a Swagger/OpenAPI document.

Every key of ``paths`` becomes one :class:`~apidocgen.models.EndpointRecord`
in document order. The configured base path is removed from the key with
:func:`strip_base_path`, and the HTTP verbs declared under the key (with their
summaries) are collected in declaration order. Path-item keys that are not
verbs, such as ``parameters`` or ``servers``, are ignored.
"""

from __future__ import annotations

import logging
from typing import Any

from apidocgen.models import EndpointMethod, EndpointRecord, HTTPMethod

logger = logging.getLogger(__name__)

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


def strip_base_path(raw_path: str, base_path: str) -> str:
    """Remove the first occurrence of *base_path* from *raw_path*.

    Leading ``/`` characters are stripped from the result, and the prefix is
    removed again while the result still starts with it. When *base_path*
    is empty or does not occur in *raw_path*, the raw path passes through
    unchanged apart from the leading ``/``.

    Example::

        >>> strip_base_path("/api/Users/{id}", "/api/")
        'Users/{id}'
        >>> strip_base_path("/health", "/api/")
        'health'
    """
    if base_path and base_path in raw_path:
        relative = raw_path.replace(base_path, "", 1)
    else:
        if base_path:
            logger.debug("Base path %r not found in %r; keeping path", base_path, raw_path)
        relative = raw_path
    relative = relative.lstrip("/")
    while base_path and relative.startswith(base_path):
        relative = relative[len(base_path):].lstrip("/")
    return relative


def extract_endpoints(document: dict[str, Any], base_path: str) -> list[EndpointRecord]:
    """Build endpoint records from ``document["paths"]``.

    Args:
        document: The parsed document, already checked by
            :func:`~apidocgen.parser.loader.validate_document`.
        base_path: Prefix to remove from every key (e.g. ``"/api/"``).

    Returns:
        Records in the document's key order. Keys that reduce to an empty
        relative path (the base path itself) are skipped.
    """
    records: list[EndpointRecord] = []
    for raw_path, path_item in document.get("paths", {}).items():
        relative = strip_base_path(raw_path, base_path)
        if not relative.strip("/"):
            logger.debug("Skipping %r: nothing left after removing base path", raw_path)
            continue
        records.append(
            EndpointRecord(
                api_path=raw_path,
                relative_path=relative,
                methods=tuple(_extract_methods(path_item)),
            )
        )
    return records


def _extract_methods(path_item: Any) -> list[EndpointMethod]:
    """Return the verbs of a *Path Item Object* in declaration order."""
    if not isinstance(path_item, dict):
        return []

    methods: list[EndpointMethod] = []
    for key, operation in path_item.items():
        verb = str(key).lower()
        if verb not in _HTTP_METHODS:
            continue
        summary = None
        if isinstance(operation, dict):
            summary = operation.get("summary") or None
        methods.append(EndpointMethod(verb=HTTPMethod(verb), summary=summary))
    return methods


def find_skipped_paths(document: dict[str, Any], base_path: str) -> list[str]:
    """Return the keys :func:`extract_endpoints` drops for being empty after stripping."""
    return [
        raw_path
        for raw_path in document.get("paths", {})
        if not strip_base_path(raw_path, base_path).strip("/")
    ]
