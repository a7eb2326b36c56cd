"""
lambdagen.core: shared span/diagnostic/type/symbol/tree primitives.

Modules:
  - span: source locations
  - diagnostics: Diagnostic record + DiagnosticLog sink
  - types_core: TypeKind/TypeRef/TypeTable
  - module_id: namespace/name module keys
  - symbols: symbols and scopes
  - tree: resolved host tree the handler pass reads and extends
"""

__all__ = [
    "span",
    "diagnostics",
    "types_core",
    "module_id",
    "symbols",
    "tree",
]
