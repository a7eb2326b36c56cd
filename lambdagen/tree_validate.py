# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structural checks on a resolved unit, run after the handler pass.

These are compiler invariants rather than user errors: any failure means a
pass produced an ill-formed tree, so they raise AssertionError.
"""

from __future__ import annotations

from typing import Iterator

from lambdagen.core.symbols import FunctionSymbol
from lambdagen.core.tree import Call, CompilationUnit, Expr, ExprStmt, FunctionDecl, ReturnStmt, VarRef
from lambdagen.core.types_core import is_assignable


def _iter_exprs(fn: FunctionDecl) -> Iterator[Expr]:
	stack: list[Expr] = []
	for stmt in fn.body.statements:
		if isinstance(stmt, ExprStmt):
			stack.append(stmt.expr)
		elif isinstance(stmt, ReturnStmt) and stmt.value is not None:
			stack.append(stmt.value)
	while stack:
		expr = stack.pop()
		yield expr
		if isinstance(expr, Call):
			stack.extend(expr.args)


def validate_unit_symbols(unit: CompilationUnit) -> None:
	"""Every top-level function is bound, by identity, in the unit scope."""
	for fn in unit.functions:
		bound = unit.scope.lookup(fn.name)
		if bound is not fn.symbol:
			raise AssertionError(f"function '{fn.name}' is not bound to its own symbol in unit {unit.module_id}")


def validate_calls(unit: CompilationUnit) -> None:
	"""Every call targets a visible function with matching arity and argument types."""
	visible_modules = {imp.module_id: imp.symbol for imp in unit.imports}
	for fn in unit.functions:
		for expr in _iter_exprs(fn):
			if isinstance(expr, VarRef) and isinstance(expr.symbol, FunctionSymbol):
				if unit.scope.lookup(expr.name) is not expr.symbol:
					raise AssertionError(f"'{fn.name}' references unbound function '{expr.name}'")
			if not isinstance(expr, Call):
				continue
			callee = expr.symbol
			if callee.module == unit.module_id:
				owner_scope = unit.scope
			else:
				module = visible_modules.get(callee.module)
				if module is None:
					raise AssertionError(f"'{fn.name}' calls '{callee.name}' from unimported module {callee.module}")
				owner_scope = module.scope
			if owner_scope.lookup(callee.name) is not callee:
				raise AssertionError(f"'{fn.name}' calls '{callee.name}' which is not bound in {callee.module}")
			lo, hi = callee.arity()
			if len(expr.args) < lo or (hi is not None and len(expr.args) > hi):
				raise AssertionError(f"'{fn.name}' calls '{callee.name}' with {len(expr.args)} arguments")
			for idx, arg in enumerate(expr.args):
				want = callee.param_type_at(idx)
				if want is None or not is_assignable(arg.type, want):
					raise AssertionError(
						f"'{fn.name}' passes {arg.type.describe()} as argument {idx + 1} of '{callee.name}'"
					)
			if callee.type.ret is not None and expr.type != callee.type.ret:
				raise AssertionError(f"call to '{callee.name}' in '{fn.name}' has type {expr.type.describe()}")


def validate_unit(unit: CompilationUnit) -> None:
	validate_unit_symbols(unit)
	validate_calls(unit)


__all__ = ["validate_unit", "validate_unit_symbols", "validate_calls"]
