"""TypeScript code generation -- grouping, naming, and declaration rendering.

Sub-modules:

* :mod:`~apidocgen.generator.grouping` -- bucket records by first path segment.
* :mod:`~apidocgen.generator.naming` -- constant names, argument lists and
  template bodies.
* :mod:`~apidocgen.generator.emitter` -- JSDoc plus ``export const`` rendering.
"""

from apidocgen.generator.emitter import render_declaration
from apidocgen.generator.grouping import group_records

__all__ = ["render_declaration", "group_records"]
