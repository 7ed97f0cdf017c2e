"""Document parser -- load a Swagger/OpenAPI document and extract endpoint records.

Typical usage::

    from apidocgen.parser import extract_endpoints, load_document, validate_document

    raw = load_document("http://localhost:5033/swagger/v1/swagger.json")
    validate_document(raw)
    records = extract_endpoints(raw, "/api/")

Sub-modules:

* :mod:`~apidocgen.parser.loader` -- I/O layer (URL, file, stdin) plus JSON
  decoding and document validation.
* :mod:`~apidocgen.parser.extractor` -- Base-path stripping and
  :class:`~apidocgen.models.EndpointRecord` construction.
"""

from apidocgen.parser.extractor import extract_endpoints, strip_base_path
from apidocgen.parser.loader import load_document, validate_document

__all__ = ["load_document", "validate_document", "extract_endpoints", "strip_base_path"]
