# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Name and type resolution: surface Program → host-tree CompilationUnit.

Two passes over the functions: signatures first (so bodies and markers can
refer to any top-level function regardless of order), then bodies. Every
problem is a resolve-phase diagnostic; the returned unit only contains the
declarations that resolved cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from lambdagen.core.diagnostics import Diagnostic, DiagnosticLog
from lambdagen.core.module_id import ModuleId
from lambdagen.core.span import Span
from lambdagen.core.symbols import (
	AnnotationSymbol,
	FunctionSymbol,
	Scope,
	Symbol,
	TypeSymbol,
	VariableSymbol,
)
from lambdagen.core.tree import (
	Block,
	Call,
	CompilationUnit,
	Expr,
	ExprStmt,
	FunctionDecl,
	ImportDecl,
	Literal,
	Marker,
	Param,
	ReturnStmt,
	Stmt,
	TypeDecl,
	VarRef,
)
from lambdagen.core.types_core import TypeRef, TypeTable, is_assignable
from lambdagen.parser import ast as A
from lambdagen.runtime_modules import ModuleRegistry


@dataclass
class ResolveResult:
	unit: CompilationUnit
	diagnostics: List[Diagnostic]


class _Resolver:
	def __init__(self, module_id: ModuleId, registry: ModuleRegistry, types: TypeTable, path: str | None) -> None:
		self.registry = registry
		self.types = types
		self.path = path
		self.log = DiagnosticLog(phase="resolve")
		self.unit = CompilationUnit(
			module_id=module_id,
			scope=Scope(module_id),
			span=Span(file=path, line=1, column=1),
		)
		self.imports_by_prefix: Dict[str, ImportDecl] = {}

	def span(self, loc: A.Located | None) -> Span:
		if loc is None:
			return Span(file=self.path)
		return Span(file=self.path, line=loc.line, column=loc.column, raw=loc)

	# Imports and local types

	def resolve_import(self, stmt: A.ImportStmt) -> None:
		mod_id = ModuleId(stmt.org, stmt.module)
		module = self.registry.get(mod_id)
		if module is None:
			self.log.error(self.span(stmt.loc), f"cannot resolve module '{mod_id}'")
			return
		decl = ImportDecl(module_id=mod_id, symbol=module, alias=stmt.alias, span=self.span(stmt.loc))
		if decl.prefix in self.imports_by_prefix:
			self.log.error(self.span(stmt.loc), f"redeclared import prefix '{decl.prefix}'")
			return
		self.imports_by_prefix[decl.prefix] = decl
		self.unit.imports.append(decl)

	def resolve_record(self, rec: A.RecordDef) -> None:
		ty = self.types.new_user(rec.name, self.unit.module_id)
		sym = TypeSymbol(name=rec.name, module=self.unit.module_id, type=ty)
		if self.types.lookup_builtin(rec.name) is not None or not self.unit.scope.define(sym):
			self.log.error(self.span(rec.loc), f"redeclared symbol '{rec.name}'")
			return
		self.unit.types.append(TypeDecl(name=rec.name, type=ty, span=self.span(rec.loc)))

	def _module_scope(self, alias: str, loc: A.Located | None) -> Optional[Scope]:
		imp = self.imports_by_prefix.get(alias)
		if imp is None:
			self.log.error(self.span(loc), f"undefined module prefix '{alias}'")
			return None
		return imp.symbol.scope

	def resolve_type(self, texpr: A.AnyTypeExpr) -> Optional[TypeRef]:
		if isinstance(texpr, A.UnionTypeExpr):
			members = [self.resolve_type(m) for m in texpr.members]
			if any(m is None for m in members):
				return None
			return self.types.new_union(members)  # type: ignore[arg-type]
		if texpr.module_alias is not None:
			scope = self._module_scope(texpr.module_alias, texpr.loc)
			if scope is None:
				return None
			sym = scope.lookup(texpr.name)
			if not isinstance(sym, TypeSymbol):
				self.log.error(self.span(texpr.loc), f"unknown type '{texpr.module_alias}:{texpr.name}'")
				return None
			return sym.type
		builtin = self.types.lookup_builtin(texpr.name)
		if builtin is not None:
			return builtin
		sym = self.unit.scope.lookup(texpr.name)
		if isinstance(sym, TypeSymbol):
			return sym.type
		self.log.error(self.span(texpr.loc), f"unknown type '{texpr.name}'")
		return None

	def resolve_marker(self, ann: A.Annotation) -> Optional[Marker]:
		if ann.module_alias is None:
			self.log.error(self.span(ann.loc), f"unknown annotation '{ann.tag}'")
			return None
		scope = self._module_scope(ann.module_alias, ann.loc)
		if scope is None:
			return None
		sym = scope.lookup(ann.tag)
		if not isinstance(sym, AnnotationSymbol):
			self.log.error(self.span(ann.loc), f"unknown annotation '{ann.module_alias}:{ann.tag}'")
			return None
		return Marker(tag=ann.tag, symbol=sym, alias=ann.module_alias, span=self.span(ann.loc))

	# Functions

	def declare_function(self, fn: A.FunctionDef) -> Optional[FunctionDecl]:
		ok = True
		markers: List[Marker] = []
		for ann in fn.annotations:
			marker = self.resolve_marker(ann)
			if marker is None:
				ok = False
			else:
				markers.append(marker)
		required: List[Param] = []
		defaultable: List[Param] = []
		rest: Param | None = None
		for p in fn.params:
			ty = self.resolve_type(p.type_expr)
			if ty is None:
				ok = False
				continue
			param = Param(name=p.name, type=ty, span=self.span(p.loc))
			if p.kind == A.PARAM_REST:
				rest = param
			elif p.kind == A.PARAM_DEFAULTABLE:
				defaultable.append(param)
			else:
				required.append(param)
		if fn.return_type is None:
			ret: TypeRef | None = self.types.ensure_nil()
		else:
			ret = self.resolve_type(fn.return_type)
		if ret is None or not ok:
			return None
		all_params = [p.type for p in (*required, *defaultable)] + ([rest.type] if rest is not None else [])
		symbol = FunctionSymbol(
			name=fn.name,
			module=self.unit.module_id,
			type=self.types.new_function(all_params, ret),
			public=fn.public,
			required_count=len(required),
			variadic=rest is not None,
		)
		if not self.unit.scope.define(symbol):
			self.log.error(self.span(fn.loc), f"redeclared symbol '{fn.name}'")
			return None
		return FunctionDecl(
			name=fn.name,
			symbol=symbol,
			return_type=ret,
			body=Block(statements=[], span=self.span(fn.loc)),
			required_params=required,
			defaultable_params=defaultable,
			rest_param=rest,
			markers=markers,
			public=fn.public,
			span=self.span(fn.loc),
		)

	def resolve_body(self, fn: A.FunctionDef, decl: FunctionDecl) -> None:
		locals_: Dict[str, Symbol] = {}
		params = [*decl.required_params, *decl.defaultable_params]
		if decl.rest_param is not None:
			params.append(decl.rest_param)
		for param in params:
			locals_[param.name] = VariableSymbol(name=param.name, module=self.unit.module_id, type=param.type)
		# Default expressions only see top-level symbols, never parameters.
		src_defaults = {p.name: p.default for p in fn.params if p.default is not None}
		for param in decl.defaultable_params:
			default = src_defaults.get(param.name)
			if default is not None:
				param.default = self.resolve_expr(default, {})
		for stmt in fn.body.statements:
			resolved = self.resolve_stmt(stmt, locals_, decl)
			if resolved is not None:
				decl.body.add_statement(resolved)

	def resolve_stmt(self, stmt: A.Stmt, locals_: Dict[str, Symbol], decl: FunctionDecl) -> Optional[Stmt]:
		if isinstance(stmt, A.ReturnStmt):
			value = self.resolve_expr(stmt.value, locals_) if stmt.value is not None else None
			if stmt.value is not None and value is None:
				return None
			got = value.type if value is not None else self.types.ensure_nil()
			if not is_assignable(got, decl.return_type):
				self.log.error(
					self.span(stmt.loc),
					f"return type mismatch in '{decl.name}': expected {decl.return_type.describe()}, got {got.describe()}",
				)
				return None
			return ReturnStmt(value=value, span=self.span(stmt.loc))
		if isinstance(stmt, A.ExprStmt):
			expr = self.resolve_expr(stmt.expr, locals_)
			if expr is None:
				return None
			return ExprStmt(expr=expr, span=self.span(stmt.loc))
		raise TypeError(f"unexpected statement {type(stmt).__name__}")

	def resolve_expr(self, expr: A.Expr, locals_: Dict[str, Symbol]) -> Optional[Expr]:
		if isinstance(expr, A.Literal):
			return Literal(value=expr.value, type=self._literal_type(expr.value), span=self.span(expr.loc))
		if isinstance(expr, A.Name):
			sym = self.lookup_value(expr, locals_)
			if sym is None:
				return None
			return VarRef(name=expr.ident, symbol=sym, type=sym.type, span=self.span(expr.loc))  # type: ignore[attr-defined]
		if isinstance(expr, A.Call):
			return self.resolve_call(expr, locals_)
		raise TypeError(f"unexpected expression {type(expr).__name__}")

	def _literal_type(self, value: object) -> TypeRef:
		if value is None:
			return self.types.ensure_nil()
		if isinstance(value, bool):
			return self.types.ensure_boolean()
		if isinstance(value, int):
			return self.types.ensure_int()
		return self.types.ensure_string()

	def lookup_value(self, name: A.Name, locals_: Dict[str, Symbol]) -> Optional[Symbol]:
		if name.module_alias is not None:
			scope = self._module_scope(name.module_alias, name.loc)
			if scope is None:
				return None
			sym = scope.lookup(name.ident)
			spelled = f"{name.module_alias}:{name.ident}"
		else:
			sym = locals_.get(name.ident) or self.unit.scope.lookup(name.ident)
			spelled = name.ident
		if not isinstance(sym, (FunctionSymbol, VariableSymbol)):
			self.log.error(self.span(name.loc), f"undefined symbol '{spelled}'")
			return None
		return sym

	def resolve_call(self, call: A.Call, locals_: Dict[str, Symbol]) -> Optional[Call]:
		callee = self.lookup_value(call.func, locals_)
		if callee is None:
			return None
		if not isinstance(callee, FunctionSymbol):
			self.log.error(self.span(call.loc), f"'{call.func.ident}' is not a function")
			return None
		args = [self.resolve_expr(a, locals_) for a in call.args]
		if any(a is None for a in args):
			return None
		lo, hi = callee.arity()
		if len(args) < lo or (hi is not None and len(args) > hi):
			if hi == lo:
				expected = str(lo)
			else:
				expected = f"{lo}..{hi}" if hi is not None else f"at least {lo}"
			self.log.error(
				self.span(call.loc),
				f"call to '{call.func.ident}' expects {expected} arguments, got {len(args)}",
			)
			return None
		for idx, arg in enumerate(args):
			want = callee.param_type_at(idx)
			if want is not None and not is_assignable(arg.type, want):  # type: ignore[union-attr]
				self.log.error(
					self.span(call.loc),
					f"argument {idx + 1} of '{call.func.ident}' expects {want.describe()}, got {arg.type.describe()}",  # type: ignore[union-attr]
				)
				return None
		ret = callee.type.ret or self.types.ensure_nil()
		return Call(
			name=call.func.ident,
			symbol=callee,
			args=args,  # type: ignore[arg-type]
			type=ret,
			qualifier=call.func.module_alias,
			span=self.span(call.loc),
		)


def resolve_program(
	prog: A.Program,
	*,
	module_id: ModuleId,
	registry: ModuleRegistry,
	types: TypeTable,
	path: str | None = None,
) -> ResolveResult:
	r = _Resolver(module_id, registry, types, path)
	for imp in prog.imports:
		r.resolve_import(imp)
	for rec in prog.records:
		r.resolve_record(rec)
	declared: List[tuple[A.FunctionDef, FunctionDecl]] = []
	for fn in prog.functions:
		decl = r.declare_function(fn)
		if decl is not None:
			declared.append((fn, decl))
	for fn, decl in declared:
		r.resolve_body(fn, decl)
		r.unit.add_function(decl)
	return ResolveResult(unit=r.unit, diagnostics=r.log.diagnostics)


__all__ = ["ResolveResult", "resolve_program"]
