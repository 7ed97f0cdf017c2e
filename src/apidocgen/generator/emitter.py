"""Render TypeScript declarations for endpoint records.

Each :class:`~apidocgen.models.EndpointRecord` becomes a JSDoc block followed
by one exported arrow function::

    /**
     * @path /api/Users/{id}
     * @method get - Get a user
     * @method delete
     * @param id
     */
    export const Users_id = (id: any) => `Users/${id}`;

The output is valid TypeScript before formatting; prettier only normalises
quoting, spacing and trailing commas.
"""

from __future__ import annotations

from apidocgen.exceptions import WriteError
from apidocgen.generator.naming import (
    argument_list,
    constant_name,
    extract_parameters,
    template_body,
)
from apidocgen.models import EndpointRecord


def render_jsdoc(record: EndpointRecord, params: list[str]) -> str:
    """Build the documentation comment for *record*.

    Lists the original path, one ``@method`` line per verb (with its summary
    when the document has one) and one ``@param`` line per parameter.
    """
    lines = ["/**", f" * @path {_comment_safe(record.api_path)}"]
    for method in record.methods:
        line = f" * @method {method.verb.value}"
        if method.summary:
            line += f" - {_comment_safe(method.summary)}"
        lines.append(line)
    for param in params:
        lines.append(f" * @param {param}")
    lines.append(" */")
    return "\n".join(lines) + "\n"


def render_declaration(record: EndpointRecord, lowercase: bool = False) -> tuple[str, str]:
    """Render the full declaration for *record*.

    Args:
        record: The endpoint to render.
        lowercase: Lower-case the constant name.

    Returns:
        A ``(name, source)`` tuple. ``source`` ends with a newline so that
        declarations can be appended back to back.

    Raises:
        WriteError: If the path yields no usable constant name.
    """
    name = constant_name(record.relative_path, lowercase)
    if not name:
        raise WriteError(f"Cannot derive a constant name from {record.api_path!r}")

    params = extract_parameters(record.relative_path)
    source = (
        render_jsdoc(record, params)
        + f"export const {name} = ({argument_list(params)}) => `{template_body(record.relative_path)}`;\n"
    )
    return name, source


def _comment_safe(text: str) -> str:
    """Keep *text* on one line and unable to close the comment."""
    return " ".join(text.split()).replace("*/", "*\\/")
