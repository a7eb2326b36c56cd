# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lambdagen: handler discovery and entry-point synthesis for lambda modules.

Pipeline:
  source → parser (surface AST) → resolver (host tree) → handlers pass
  (collect + synthesize) → tree validation → printer / trace artifact

The CLI entrypoint is `lambdagen.driver:main`.
"""

__all__ = ["core", "parser", "handlers"]
