# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Surface AST produced by the lark builder.

Nodes are purely syntactic: names are strings, types are unresolved
TypeExprs. The resolver turns a Program into a host-tree CompilationUnit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int


@dataclass
class TypeExpr:
	"""`name` or `alias:name`; the nil type is spelled `()`."""
	name: str
	module_alias: Optional[str] = None
	loc: Optional[Located] = None


@dataclass
class UnionTypeExpr:
	"""`A|B|...`; members are kept in source order, duplicates included."""
	members: List[TypeExpr]
	loc: Optional[Located] = None


AnyTypeExpr = Union[TypeExpr, UnionTypeExpr]


class Expr:
	loc: Located


@dataclass
class Literal(Expr):
	"""String, int or bool literal; `value is None` is the nil literal `()`."""
	value: Union[str, int, bool, None]
	loc: Located


@dataclass
class Name(Expr):
	ident: str
	loc: Located
	module_alias: Optional[str] = None


@dataclass
class Call(Expr):
	func: Name
	args: List[Expr]
	loc: Located


class Stmt:
	loc: Located


@dataclass
class ReturnStmt(Stmt):
	loc: Located
	value: Optional[Expr] = None


@dataclass
class ExprStmt(Stmt):
	loc: Located
	expr: Expr


@dataclass
class Block:
	statements: List[Stmt] = field(default_factory=list)


@dataclass
class Annotation:
	"""`@alias:tag`, or `@tag` for a unit-local annotation."""
	tag: str
	loc: Located
	module_alias: Optional[str] = None


PARAM_REQUIRED = "required"
PARAM_DEFAULTABLE = "defaultable"
PARAM_REST = "rest"


@dataclass
class Param:
	name: str
	type_expr: AnyTypeExpr
	loc: Located
	kind: str = PARAM_REQUIRED
	default: Optional[Expr] = None


@dataclass
class FunctionDef:
	name: str
	params: List[Param]
	return_type: Optional[AnyTypeExpr]
	body: Block
	loc: Located
	annotations: List[Annotation] = field(default_factory=list)
	public: bool = False


@dataclass
class ImportStmt:
	"""`import org/module [as alias];`"""
	org: str
	module: str
	loc: Located
	alias: Optional[str] = None


@dataclass
class RecordDef:
	name: str
	loc: Located


@dataclass
class Program:
	imports: List[ImportStmt] = field(default_factory=list)
	records: List[RecordDef] = field(default_factory=list)
	functions: List[FunctionDef] = field(default_factory=list)


__all__ = [
	"Located",
	"TypeExpr",
	"UnionTypeExpr",
	"AnyTypeExpr",
	"Expr",
	"Literal",
	"Name",
	"Call",
	"Stmt",
	"ReturnStmt",
	"ExprStmt",
	"Block",
	"Annotation",
	"Param",
	"PARAM_REQUIRED",
	"PARAM_DEFAULTABLE",
	"PARAM_REST",
	"FunctionDef",
	"ImportStmt",
	"RecordDef",
	"Program",
]
