# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolved host tree.

Pipeline placement:
  surface AST (lambdagen/parser/ast.py) → host tree (this file) → handler pass

Every node produced by the resolver carries its resolved TypeRef and, where
it names something, the resolved Symbol. The handler pass only reads these
nodes and appends new ones; it never re-resolves names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .module_id import ModuleId
from .span import Span
from .symbols import AnnotationSymbol, FunctionSymbol, ModuleSymbol, Scope, Symbol
from .types_core import TypeRef


class Node:
	"""Base class for all host tree nodes."""
	pass


class Expr(Node):
	type: TypeRef


class Stmt(Node):
	pass


# Expressions

@dataclass
class Literal(Expr):
	"""Literal value (string, int, bool, or nil when `value is None`)."""
	value: Union[str, int, bool, None]
	type: TypeRef
	span: Span = field(default_factory=Span)


@dataclass
class VarRef(Expr):
	"""Reference to a resolved symbol used as a value."""
	name: str
	symbol: Symbol
	type: TypeRef
	span: Span = field(default_factory=Span)


@dataclass
class Call(Expr):
	"""
	Direct call of a resolved function symbol.

	`qualifier` is the module alias the call is spelled with (`alias:name`), or
	None for calls to functions of the same unit.
	"""
	name: str
	symbol: FunctionSymbol
	args: List[Expr]
	type: TypeRef
	qualifier: Optional[str] = None
	span: Span = field(default_factory=Span)


# Statements

@dataclass
class ExprStmt(Stmt):
	expr: Expr
	span: Span = field(default_factory=Span)


@dataclass
class ReturnStmt(Stmt):
	value: Optional[Expr]
	span: Span = field(default_factory=Span)


@dataclass
class Block(Node):
	statements: List[Stmt] = field(default_factory=list)
	span: Span = field(default_factory=Span)

	def add_statement(self, stmt: Stmt) -> None:
		self.statements.append(stmt)


# Declarations

@dataclass
class Marker(Node):
	"""
	Annotation attached to a declaration (`@alias:tag`).

	`symbol` is the resolved annotation; its (namespace, module, tag) triple is
	the marker identity.
	"""
	tag: str
	symbol: AnnotationSymbol
	alias: Optional[str] = None
	span: Span = field(default_factory=Span)

	@property
	def identity(self) -> tuple[str, str, str]:
		return self.symbol.identity


@dataclass
class Param(Node):
	name: str
	type: TypeRef
	default: Optional[Expr] = None
	span: Span = field(default_factory=Span)


@dataclass
class FunctionDecl(Node):
	"""
	Top-level function.

	Parameters are split the way call sites bind them: required (positional),
	defaultable (carry a default expression), and an optional rest parameter.
	"""
	name: str
	symbol: FunctionSymbol
	return_type: TypeRef
	body: Block
	required_params: List[Param] = field(default_factory=list)
	defaultable_params: List[Param] = field(default_factory=list)
	rest_param: Optional[Param] = None
	markers: List[Marker] = field(default_factory=list)
	public: bool = False
	span: Span = field(default_factory=Span)


@dataclass
class TypeDecl(Node):
	"""Unit-local record type declaration."""
	name: str
	type: TypeRef
	span: Span = field(default_factory=Span)


@dataclass
class ImportDecl(Node):
	"""`import namespace/name [as alias];` resolved to the module's symbol."""
	module_id: ModuleId
	symbol: ModuleSymbol
	alias: Optional[str] = None
	span: Span = field(default_factory=Span)

	@property
	def prefix(self) -> str:
		"""Name the unit uses to qualify members of this module."""
		return self.alias or self.module_id.name


@dataclass
class CompilationUnit(Node):
	"""
	One resolved source module.

	`scope` holds the unit's top-level symbols (functions and local types).
	`span` is the unit's root position.
	"""
	module_id: ModuleId
	scope: Scope
	imports: List[ImportDecl] = field(default_factory=list)
	types: List[TypeDecl] = field(default_factory=list)
	functions: List[FunctionDecl] = field(default_factory=list)
	span: Span = field(default_factory=Span)

	def add_function(self, decl: FunctionDecl) -> None:
		self.functions.append(decl)

	def find_import(self, module_id: ModuleId) -> Optional[ImportDecl]:
		"""First import whose namespace and module name equal `module_id`."""
		for imp in self.imports:
			if imp.module_id.namespace == module_id.namespace and imp.module_id.name == module_id.name:
				return imp
		return None

	def find_function(self, name: str) -> Optional[FunctionDecl]:
		return next((fn for fn in self.functions if fn.name == name), None)


__all__ = [
	"Node",
	"Expr",
	"Stmt",
	"Literal",
	"VarRef",
	"Call",
	"ExprStmt",
	"ReturnStmt",
	"Block",
	"Marker",
	"Param",
	"FunctionDecl",
	"TypeDecl",
	"ImportDecl",
	"CompilationUnit",
]
