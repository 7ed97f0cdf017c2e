"""Canonical Pydantic models shared across all apidocgen modules.

The models fall into three groups:

**Configuration** -- :class:`GenerationConfig`, built once at startup from CLI
flags, environment variables, a project-local ``apidocgen.json`` and
interactive prompts, then passed explicitly to every collaborator.

**Parser output** -- :class:`HTTPMethod`, :class:`EndpointMethod`,
:class:`EndpointRecord` and :class:`Group`, produced by
:mod:`apidocgen.parser` and :mod:`apidocgen.generator`.

**Run results** -- :class:`RecordResult` and :class:`GenerationReport`,
collected by :class:`~apidocgen.writer.OutputWriter` so that a failure on one
endpoint is reported instead of aborting the batch.

Configuration and parser models are frozen: they are never mutated after
construction.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class GenerationConfig(BaseModel):
    """Effective configuration of a single generation run.

    Example::

        GenerationConfig(
            source_url="http://localhost:5033/swagger/v1/swagger.json",
            base_path="/api/",
            output_directory="../frontend/src/",
            flatten_folders=True,
        )
    """

    model_config = ConfigDict(frozen=True)

    source_url: str = Field(description="URL or file path of the swagger.json document")
    base_path: str = Field(description="Prefix removed from every endpoint key, e.g. /api/")
    output_directory: Optional[str] = Field(
        default=None,
        description="Directory that receives the api_docs tree. "
        "When unset the tree stays in the working location and is revealed.",
    )
    flatten_folders: bool = Field(
        default=False, description="Write api_docs/<group>.ts instead of api_docs/<group>/<group>.ts"
    )
    lowercase_names: bool = Field(
        default=False, description="Lower-case group keys and constant names"
    )
    format_output: bool = Field(default=True, description="Run prettier on every generated file")
    reveal_output: bool = Field(
        default=True, description="Open the result in the platform file manager"
    )


# --- Parser output ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods that may appear as keys of an OpenAPI *Path Item Object*."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class EndpointMethod(BaseModel):
    """One verb declared under a path, with its optional summary."""

    model_config = ConfigDict(frozen=True)

    verb: HTTPMethod
    summary: Optional[str] = None


class EndpointRecord(BaseModel):
    """A single path of the document, ready for code emission.

    ``api_path`` is the original key (``/api/Users/{id}``) and
    ``relative_path`` the same key with the base path removed
    (``Users/{id}``).
    """

    model_config = ConfigDict(frozen=True)

    api_path: str
    relative_path: str
    methods: tuple[EndpointMethod, ...] = ()

    @property
    def verbs(self) -> list[str]:
        """HTTP verbs in document order."""
        return [m.verb.value for m in self.methods]

    @property
    def first_segment(self) -> str:
        """First ``/``-separated segment of :attr:`relative_path`."""
        return self.relative_path.split("/", 1)[0]


class Group(BaseModel):
    """Endpoints sharing a first path segment; maps to one output file."""

    key: str
    records: list[EndpointRecord] = Field(default_factory=list)


# --- Run results ---


class RecordResult(BaseModel):
    """Outcome of generating a single :class:`EndpointRecord`."""

    name: str
    api_path: str
    file_path: str
    ok: bool = True
    error: Optional[str] = None


class GenerationReport(BaseModel):
    """Per-record results of a run, in processing order."""

    results: list[RecordResult] = Field(default_factory=list)
    output_root: Optional[str] = None

    @property
    def succeeded(self) -> list[RecordResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[RecordResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        """``True`` when no record failed."""
        return not self.failed
