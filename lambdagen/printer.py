# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Render host-tree declarations back to surface syntax.

Used by the driver to show the synthesized entry point; output re-parses
with the surface grammar for any declaration made of supported nodes.
"""

from __future__ import annotations

import json

from lambdagen.core.module_id import ModuleId
from lambdagen.core.tree import Call, CompilationUnit, Expr, ExprStmt, FunctionDecl, Literal, Param, ReturnStmt, Stmt, VarRef
from lambdagen.core.types_core import TypeKind, TypeRef

INDENT = "    "


def _prefixes(unit: CompilationUnit | None) -> dict[ModuleId, str | None]:
	if unit is None:
		return {}
	out: dict[ModuleId, str | None] = {imp.module_id: imp.prefix for imp in unit.imports}
	out[unit.module_id] = None
	return out


def render_type(ty: TypeRef, prefixes: dict[ModuleId, str | None] | None = None) -> str:
	"""Spell `ty`; `prefixes` maps module ids to the alias the unit uses (None = unqualified)."""
	if ty.kind is TypeKind.NIL:
		return "()"
	if ty.kind is TypeKind.UNION:
		return "|".join(render_type(m, prefixes) for m in ty.members)
	if ty.kind is TypeKind.USER_DEFINED and prefixes and ty.origin in prefixes:
		prefix = prefixes[ty.origin]
		return ty.name if prefix is None else f"{prefix}:{ty.name}"
	return ty.describe()


def render_expr(expr: Expr) -> str:
	if isinstance(expr, Literal):
		if expr.value is None:
			return "()"
		if isinstance(expr.value, bool):
			return "true" if expr.value else "false"
		if isinstance(expr.value, str):
			return json.dumps(expr.value, ensure_ascii=False)
		return str(expr.value)
	if isinstance(expr, VarRef):
		return expr.name
	if isinstance(expr, Call):
		callee = f"{expr.qualifier}:{expr.name}" if expr.qualifier else expr.name
		return f"{callee}({', '.join(render_expr(a) for a in expr.args)})"
	raise TypeError(f"cannot render {type(expr).__name__}")


def render_stmt(stmt: Stmt) -> str:
	if isinstance(stmt, ExprStmt):
		return f"{render_expr(stmt.expr)};"
	if isinstance(stmt, ReturnStmt):
		if stmt.value is None:
			return "return;"
		return f"return {render_expr(stmt.value)};"
	raise TypeError(f"cannot render {type(stmt).__name__}")


def _render_param(param: Param, prefixes: dict[ModuleId, str | None], *, rest: bool = False) -> str:
	if rest:
		return f"{render_type(param.type, prefixes)}... {param.name}"
	text = f"{render_type(param.type, prefixes)} {param.name}"
	if param.default is not None:
		text += f" = {render_expr(param.default)}"
	return text


def render_function(fn: FunctionDecl, unit: CompilationUnit | None = None) -> str:
	prefixes = _prefixes(unit)
	lines: list[str] = []
	for marker in fn.markers:
		lines.append(f"@{marker.alias}:{marker.tag}" if marker.alias else f"@{marker.tag}")
	params = [_render_param(p, prefixes) for p in (*fn.required_params, *fn.defaultable_params)]
	if fn.rest_param is not None:
		params.append(_render_param(fn.rest_param, prefixes, rest=True))
	head = f"{'public ' if fn.public else ''}function {fn.name}({', '.join(params)})"
	if fn.return_type.kind is not TypeKind.NIL:
		head += f" returns {render_type(fn.return_type, prefixes)}"
	lines.append(head + " {")
	for stmt in fn.body.statements:
		lines.append(INDENT + render_stmt(stmt))
	lines.append("}")
	return "\n".join(lines)


def render_unit(unit: CompilationUnit) -> str:
	chunks: list[str] = []
	for imp in unit.imports:
		alias = f" as {imp.alias}" if imp.alias else ""
		chunks.append(f"import {imp.module_id}{alias};")
	for td in unit.types:
		chunks.append(f"type {td.name} record {{}}")
	for fn in unit.functions:
		chunks.append(render_function(fn, unit))
	return "\n\n".join(chunks) + "\n"


__all__ = ["render_type", "render_expr", "render_stmt", "render_function", "render_unit"]
