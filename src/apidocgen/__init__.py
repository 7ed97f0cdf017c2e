"""apidocgen -- Generate TypeScript URL helpers from OpenAPI/Swagger documents.

The tool fetches a Swagger or OpenAPI document from a running backend, strips a
configured base path from every endpoint, and writes one TypeScript file per
top-level path segment. Each file exports small functions that rebuild an
endpoint's URL from its path parameters::

    /**
     * @path /api/Users/{id}
     * @method get
     * @param id
     */
    export const Users_id = (id: any) => `Users/${id}`;

Typical workflow::

    apidocgen -s http://localhost:5033/swagger/v1/swagger.json --bp /api/

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: Scratch-state files and configuration precedence resolution.
    pipeline: The fetch -> extract -> emit -> place -> cleanup sequence.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
