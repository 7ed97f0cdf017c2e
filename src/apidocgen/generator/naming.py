"""Identifier and template rules for generated URL helpers.

Turns a relative endpoint path such as ``Users/{id}/orders/{orderId}`` into
the pieces of a TypeScript declaration:

* :func:`extract_parameters` -- ``["id", "orderId"]``
* :func:`argument_list` -- ``"id: any, orderId: any"``
* :func:`constant_name` -- ``"Users_id_orders_orderId"``
* :func:`template_body` -- ``"Users/${id}/orders/${orderId}"``

Constant names always match ``^[A-Za-z0-9]+(_[A-Za-z0-9]+)*$``.
"""

from __future__ import annotations

import re

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")
_NON_NAME_RE = re.compile(r"[^A-Za-z0-9]+")
_NON_IDENT_RE = re.compile(r"[^A-Za-z0-9_$]")

PARAMETER_TYPE = "any"
"""Type annotation given to every generated argument."""

NAME_PREFIX = "Api"
"""Prepended to constant names that would not be valid identifiers."""

RESERVED_WORDS = frozenset(
    {
        "arguments", "await", "break", "case", "catch", "class", "const",
        "continue", "debugger", "default", "delete", "do", "else", "enum",
        "eval", "export", "extends", "false", "finally", "for", "function",
        "if", "implements", "import", "in", "instanceof", "interface", "let",
        "new", "null", "package", "private", "protected", "public", "return",
        "static", "super", "switch", "this", "throw", "true", "try", "typeof",
        "var", "void", "while", "with", "yield",
    }
)
"""Words that cannot name a binding in a TypeScript module."""


def extract_parameters(relative_path: str) -> list[str]:
    """Return the ``{name}`` placeholders of *relative_path*, left to right.

    A placeholder that appears more than once is listed at its first
    position only. Names are converted with :func:`parameter_identifier`.
    """
    params: list[str] = []
    for match in _PLACEHOLDER_RE.finditer(relative_path):
        name = parameter_identifier(match.group(1))
        if name not in params:
            params.append(name)
    return params


def parameter_identifier(raw: str) -> str:
    """Make a placeholder name usable as a TypeScript identifier.

    ``user-id`` becomes ``user_id``, ``2fa`` becomes ``_2fa`` and reserved
    words get a trailing underscore (``default`` becomes ``default_``).
    """
    ident = _NON_IDENT_RE.sub("_", raw.strip())
    if not ident or ident[0].isdigit():
        ident = f"_{ident}"
    if ident in RESERVED_WORDS:
        ident = f"{ident}_"
    return ident


def argument_list(params: list[str]) -> str:
    """Join parameters into an untyped argument list, e.g. ``"id: any, slug: any"``."""
    return ", ".join(f"{p}: {PARAMETER_TYPE}" for p in params)


def constant_name(relative_path: str, lowercase: bool = False) -> str:
    """Build the exported constant name for *relative_path*.

    Every run of characters outside ``[A-Za-z0-9]`` (``/``, ``{``, ``}``,
    ``-``, ``.``, existing underscores) becomes a single ``_`` and leading or
    trailing underscores are removed. A name that starts with a digit or is a
    reserved word gets the :data:`NAME_PREFIX` segment (``2fa/verify`` becomes
    ``Api_2fa_verify``).

    Returns:
        The name, or an empty string when the path holds no letters or digits.
    """
    name = _NON_NAME_RE.sub("_", relative_path).strip("_")
    if name and (name[0].isdigit() or name.lower() in RESERVED_WORDS):
        name = f"{NAME_PREFIX}_{name}"
    return name.lower() if lowercase else name


def template_body(relative_path: str) -> str:
    """Rewrite ``{name}`` placeholders as ``${name}`` template substitutions.

    Backticks and backslashes in the literal parts are escaped so the result
    can sit inside a TypeScript template literal.
    """
    parts: list[str] = []
    pos = 0
    for match in _PLACEHOLDER_RE.finditer(relative_path):
        parts.append(_escape_literal(relative_path[pos:match.start()]))
        parts.append("${" + parameter_identifier(match.group(1)) + "}")
        pos = match.end()
    parts.append(_escape_literal(relative_path[pos:]))
    return "".join(parts)


def _escape_literal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")
